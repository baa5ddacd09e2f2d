"""
Tests for summaries, trend fitting and charts (Agg backend, no display)
"""
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from src.config import PipelineConfig
from src.data_engine import InsufficientDataError, join_tables, sanitize
from src.reporting import (
    build_report,
    compare_summaries,
    compare_trends,
    describe_columns,
    fit_trend,
    missing_summary,
    shared_axis_limits,
)
from src.reporting.plots import (
    _is_numeric,
    plot_distributions,
    plot_target_by_group,
    plot_target_vs_predictors,
    plot_trend_comparison,
)


@pytest.fixture
def raw_and_cleaned(features, links, targets):
    joined = join_tables(features, links, targets)
    raw, cleaned, _ = sanitize(joined)
    return raw, cleaned


def test_fit_trend_recovers_line():
    df = pd.DataFrame({"bmi": [20.0, 25.0, 30.0, np.nan], "charges": [41.0, 51.0, 61.0, 5.0]})
    line = fit_trend(df, "bmi", "charges", "raw")
    assert line.intercept == pytest.approx(1.0)
    assert line.slope == pytest.approx(2.0)
    assert line.n == 3
    assert line.predict([10])[0] == pytest.approx(21.0)


def test_fit_trend_needs_two_rows():
    df = pd.DataFrame({"bmi": [20.0, np.nan], "charges": [41.0, 51.0]})
    with pytest.raises(InsufficientDataError):
        fit_trend(df, "bmi", "charges", "cleaned")


def test_compare_trends_differs_after_cleaning(raw_and_cleaned):
    raw, cleaned = raw_and_cleaned
    raw_line, clean_line = compare_trends(raw, cleaned, "bmi", "charges")
    assert (raw_line.label, clean_line.label) == ("raw", "cleaned")
    # charges were generated as 1500 + 350 * bmi on plausible values
    assert clean_line.slope == pytest.approx(350.0)
    assert clean_line.intercept == pytest.approx(1500.0)
    assert raw_line.slope < clean_line.slope
    assert raw_line.n == clean_line.n + 1


def test_shared_axis_limits_follow_cleaned_data(raw_and_cleaned):
    raw, cleaned = raw_and_cleaned
    (xmin, xmax), (ymin, ymax) = shared_axis_limits([raw, cleaned], "bmi", "charges")
    assert xmin < cleaned["bmi"].min() and xmax > cleaned["bmi"].max()
    assert xmax < raw["bmi"].max()
    assert ymin < ymax


def test_describe_columns(raw_and_cleaned):
    _, cleaned = raw_and_cleaned
    summary = describe_columns(cleaned)
    assert {"age", "bmi", "children", "charges"} <= set(summary["numeric"].columns)
    assert {"sex", "smoker", "region"} <= set(summary["categorical"].columns)
    assert "50%" in summary["numeric"].index
    assert "top" in summary["categorical"].index


def test_missing_summary(raw_and_cleaned):
    raw, cleaned = raw_and_cleaned
    missing = missing_summary(raw, cleaned)
    assert missing.loc["age", "added"] == 1
    assert missing.loc["bmi", "added"] == 1
    assert missing.loc["charges", "added"] == 0


def test_compare_summaries_layout(raw_and_cleaned):
    raw, cleaned = raw_and_cleaned
    table = compare_summaries(raw, cleaned, ["age", "bmi"])
    assert list(table.columns) == [("age", "raw"), ("age", "cleaned"), ("bmi", "raw"), ("bmi", "cleaned")]
    assert table.loc["min", ("age", "raw")] == -999
    assert table.loc["max", ("bmi", "raw")] == 500
    assert table.loc["max", ("bmi", "cleaned")] < 500


def test_build_report(raw_and_cleaned):
    raw, cleaned = raw_and_cleaned
    report = build_report(raw, cleaned, PipelineConfig())
    assert report.cleaned_trend.label == "cleaned"
    assert "charges" in report.correlation.columns
    assert set(report.value_counts) == {"sex", "smoker", "region"}


def test_plots_render(raw_and_cleaned):
    raw, cleaned = raw_and_cleaned
    config = PipelineConfig()
    open_before = set(plt.get_fignums())

    fig = plot_distributions(raw, cleaned, config.sanitized_columns)
    assert len(fig.axes) == 6
    plt.close(fig)

    fig = plot_target_vs_predictors(cleaned, config.target, config.predictors)
    assert sum(ax.get_visible() for ax in fig.axes) == len(config.predictors)
    plt.close(fig)

    fig = plot_target_by_group(cleaned, "bmi", "charges", "smoker")
    plt.close(fig)

    lines = compare_trends(raw, cleaned, "bmi", "charges")
    fig = plot_trend_comparison(raw, cleaned, "bmi", "charges", lines)
    ax_raw, ax_clean = fig.axes[:2]
    assert ax_raw.get_xlim() == ax_clean.get_xlim()
    assert len(ax_raw.get_lines()) == 2
    plt.close(fig)

    # closing each returned figure releases everything the plot created
    assert set(plt.get_fignums()) == open_before


def test_low_cardinality_predictors_are_categorical(raw_and_cleaned):
    _, cleaned = raw_and_cleaned
    assert _is_numeric(cleaned["bmi"])
    assert _is_numeric(cleaned["age"])
    assert not _is_numeric(cleaned["children"])
    assert not _is_numeric(cleaned["smoker"])
