"""
Insurance EDA - charges vs beneficiary attributes
Main Streamlit application
"""

import logging
import os
import sys

import matplotlib.pyplot as plt
import streamlit as st

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.config import PipelineConfig, default_database_path
from src.data_engine.errors import InsuranceEDAError
from src.pipeline import run_pipeline, run_pipeline_bytes
from src.reporting.plots import (
    plot_correlation_heatmap,
    plot_distributions,
    plot_target_by_group,
    plot_target_vs_predictors,
    plot_trend_comparison,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

st.set_page_config(
    page_title="Insurance EDA",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .main-header {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        padding: 1.5rem 2rem;
        border-radius: 12px;
        margin-bottom: 2rem;
        color: white;
        text-align: center;
    }

    .main-header h1 {
        color: white !important;
        margin: 0;
        font-size: 2.2rem;
    }

    .main-header p {
        margin: 0.5rem 0 0 0;
        opacity: 0.95;
    }
</style>
""", unsafe_allow_html=True)

config = PipelineConfig()

# Sidebar
with st.sidebar:
    st.markdown("## 🗄️ Database")
    db_path = st.text_input("SQLite file path", value=str(default_database_path()))
    uploaded_file = st.file_uploader("...or upload a .db file", type=["db", "sqlite", "sqlite3"])

    st.markdown("---")
    st.markdown("### ⚙️ Outlier rule")
    multiplier = st.slider("MAD multiplier", 2.0, 10.0, float(config.mad_multiplier), 0.5)
    scaled = st.checkbox("Scale MAD by 1.4826 (normal consistency)", value=False)
    config = PipelineConfig(mad_multiplier=multiplier, mad_scale="normal" if scaled else 1.0)

    st.markdown("---")
    st.markdown("### 📋 Steps")
    st.markdown("1. Load tables")
    st.markdown("2. Join on ids")
    st.markdown("3. Recode sentinels, flag BMI outliers")
    st.markdown("4. Explore charges")


@st.cache_data(show_spinner="Running pipeline...")
def _run(path: str, cfg: PipelineConfig):
    return run_pipeline(path, cfg)


@st.cache_data(show_spinner="Running pipeline...")
def _run_uploaded(data: bytes, cfg: PipelineConfig):
    return run_pipeline_bytes(data, cfg)


try:
    if uploaded_file is not None:
        result = _run_uploaded(uploaded_file.getvalue(), config)
    else:
        result = _run(db_path, config)
except InsuranceEDAError as e:
    st.error(f"**{type(e).__name__}:** {e}")
    st.stop()

raw, cleaned, sanitization, report = result.raw, result.cleaned, result.sanitization, result.report

st.markdown('<div class="main-header"><h1>📊 Insurance EDA</h1><p>Load, join, sanitize, explore charges</p></div>', unsafe_allow_html=True)

tab1, tab2, tab3, tab4, tab5 = st.tabs([
    "📋 Data Preview",
    "📈 Summary Statistics",
    "🧹 Outlier Cleaning",
    "🔍 Charges vs Predictors",
    "📉 Trend Comparison",
])

with tab1:
    st.subheader("Cleaned Data Preview")
    st.dataframe(cleaned, use_container_width=True, height=400)
    st.caption(f"Shape: {cleaned.shape[0]} rows × {cleaned.shape[1]} columns")
    with st.expander("Raw (joined, unsanitized) data"):
        st.dataframe(raw, use_container_width=True, height=300)

with tab2:
    st.subheader("Numeric columns (cleaned)")
    st.dataframe(report.cleaned_summary["numeric"], use_container_width=True)
    st.subheader("Categorical columns (cleaned)")
    st.dataframe(report.cleaned_summary["categorical"], use_container_width=True)
    if report.value_counts:
        col = st.selectbox("Value counts for", list(report.value_counts))
        st.bar_chart(report.value_counts[col])
    st.markdown("#### Correlation (numeric columns)")
    fig = plot_correlation_heatmap(cleaned)
    st.pyplot(fig)
    plt.close(fig)

with tab3:
    st.subheader("Sanitization Report")
    bounds = sanitization.bounds
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Rows", sanitization.rows)
    with c2:
        st.metric(f"{sanitization.sentinel_column} = {sanitization.sentinel_value}", sanitization.sentinel_replaced)
    with c3:
        st.metric(f"{sanitization.outlier_column} outliers", sanitization.outliers_flagged)
    st.markdown(
        f"Inlier bound for **{bounds.column}**: median {bounds.median:.3f} ± "
        f"{bounds.multiplier:g} × MAD {bounds.mad:.3f} → [{bounds.lower:.3f}, {bounds.upper:.3f}]"
    )
    st.markdown("#### Before / after")
    st.dataframe(report.sanitized_comparison, use_container_width=True)
    st.markdown("#### Missing values")
    st.dataframe(report.missing, use_container_width=True)
    fig = plot_distributions(raw, cleaned, config.sanitized_columns)
    st.pyplot(fig)
    plt.close(fig)

with tab4:
    st.subheader(f"{config.target} vs predictors")
    fig = plot_target_vs_predictors(cleaned, config.target, config.predictors)
    st.pyplot(fig)
    plt.close(fig)
    st.markdown(f"#### {config.target} vs {config.trend_predictor} by {config.group_column}")
    fig = plot_target_by_group(cleaned, config.trend_predictor, config.target, config.group_column)
    st.pyplot(fig)
    plt.close(fig)

with tab5:
    st.subheader(f"Linear trend: {config.target} ~ {config.trend_predictor}")
    lines = [report.raw_trend, report.cleaned_trend]
    st.table([
        {"fit": line.label, "intercept": round(line.intercept, 3), "slope": round(line.slope, 3), "n": line.n}
        for line in lines
    ])
    fig = plot_trend_comparison(raw, cleaned, config.trend_predictor, config.target, lines)
    st.pyplot(fig)
    plt.close(fig)
