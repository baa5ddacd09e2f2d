"""
Charts for the insurance EDA - matplotlib/seaborn, rendered off-screen.
Every function returns a Figure; callers display and close it.
"""

from typing import Iterable, Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from .trend import TrendLine, shared_axis_limits

sns.set_theme(style="whitegrid")


def _is_numeric(series: pd.Series) -> bool:
    """
    Treat a predictor as continuous only above 6 distinct values.

    Low-cardinality integer columns such as children are drawn as boxplots
    per value rather than as a scatter.
    """
    return pd.api.types.is_numeric_dtype(series) and series.nunique(dropna=True) > 6


def plot_distributions(
    raw: pd.DataFrame,
    cleaned: pd.DataFrame,
    columns: Iterable[str],
):
    """Histogram (raw vs cleaned) and boxplot per column, one row per column."""
    columns = list(columns)
    fig, axes = plt.subplots(len(columns), 3, figsize=(15, 4 * len(columns)), squeeze=False)
    for row, col in enumerate(columns):
        ax_raw, ax_clean, ax_box = axes[row]
        sns.histplot(raw[col].dropna(), bins=30, ax=ax_raw, color="#764ba2")
        ax_raw.set_title(f"{col} (raw)")
        sns.histplot(cleaned[col].dropna(), bins=30, ax=ax_clean, color="#667eea")
        ax_clean.set_title(f"{col} (cleaned)")

        stacked = pd.DataFrame({
            "value": pd.concat([raw[col], cleaned[col]], ignore_index=True),
            "state": ["raw"] * len(raw) + ["cleaned"] * len(cleaned),
        }).dropna()
        sns.boxplot(data=stacked, x="state", y="value", ax=ax_box)
        ax_box.set_title(f"{col}: raw vs cleaned")
        ax_box.set_ylabel(col)
    fig.tight_layout()
    return fig


def plot_target_vs_predictors(
    df: pd.DataFrame,
    target: str,
    predictors: Sequence[str],
    ncols: int = 3,
):
    """Scatter for numeric predictors, boxplot for categorical ones."""
    predictors = [p for p in predictors if p in df.columns]
    nrows = max(1, int(np.ceil(len(predictors) / ncols)))
    fig, axes = plt.subplots(nrows, ncols, figsize=(5 * ncols, 4 * nrows), squeeze=False)
    flat = axes.ravel()
    for ax, predictor in zip(flat, predictors):
        data = df[[predictor, target]].dropna()
        if _is_numeric(data[predictor]):
            sns.scatterplot(data=data, x=predictor, y=target, ax=ax, alpha=0.5, s=15)
        else:
            sns.boxplot(data=data, x=predictor, y=target, ax=ax)
        ax.set_title(f"{target} vs {predictor}")
    for ax in flat[len(predictors):]:
        ax.set_visible(False)
    fig.tight_layout()
    return fig


def plot_target_by_group(df: pd.DataFrame, x: str, y: str, hue: str):
    """Scatter of y vs x coloured by a categorical column."""
    fig, ax = plt.subplots(figsize=(8, 6))
    sns.scatterplot(data=df[[x, y, hue]].dropna(), x=x, y=y, hue=hue, ax=ax, alpha=0.6, s=20)
    ax.set_title(f"{y} vs {x} by {hue}")
    fig.tight_layout()
    return fig


def plot_trend_comparison(
    raw: pd.DataFrame,
    cleaned: pd.DataFrame,
    x: str,
    y: str,
    lines: Sequence[TrendLine],
):
    """Raw and cleaned scatter panels on shared axes, each with both trend lines."""
    xlim, ylim = shared_axis_limits([raw, cleaned], x, y)
    grid = np.linspace(xlim[0], xlim[1], 100)

    fig, axes = plt.subplots(1, 2, figsize=(14, 5), sharex=True, sharey=True)
    for ax, (name, frame) in zip(axes, (("raw", raw), ("cleaned", cleaned))):
        data = frame[[x, y]].dropna()
        ax.scatter(data[x], data[y], alpha=0.4, s=12, color="grey")
        for line in lines:
            ax.plot(
                grid,
                line.predict(grid),
                linewidth=2,
                label=f"{line.label}: {line.intercept:.1f} + {line.slope:.2f}·{x}",
            )
        ax.set_xlim(*xlim)
        ax.set_ylim(*ylim)
        ax.set_title(f"{y} vs {x} ({name} data)")
        ax.set_xlabel(x)
        ax.set_ylabel(y)
        ax.legend(loc="upper left")
    fig.tight_layout()
    return fig


def plot_correlation_heatmap(df: pd.DataFrame):
    numeric_cols = df.select_dtypes(include=["number"]).columns.tolist()
    fig, ax = plt.subplots(figsize=(8, 6))
    corr = df[numeric_cols].corr()
    sns.heatmap(corr, annot=True, cmap="coolwarm", center=0, ax=ax, fmt=".2f")
    ax.set_title("Correlation (numeric columns)")
    fig.tight_layout()
    return fig
