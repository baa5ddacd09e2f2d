"""
EDA report - the numbers behind the dashboard, computed once per run.
Rendering is left to plots.py so the report can be built headless.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import pandas as pd

from ..config import PipelineConfig
from .summary import compare_summaries, correlation_matrix, describe_columns, missing_summary
from .trend import TrendLine, compare_trends

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EDAReport:
    raw_summary: Dict[str, pd.DataFrame]
    cleaned_summary: Dict[str, pd.DataFrame]
    sanitized_comparison: pd.DataFrame
    missing: pd.DataFrame
    correlation: pd.DataFrame
    raw_trend: TrendLine
    cleaned_trend: TrendLine
    value_counts: Dict[str, pd.Series] = field(default_factory=dict)


def build_report(
    raw: pd.DataFrame,
    cleaned: pd.DataFrame,
    config: Optional[PipelineConfig] = None,
) -> EDAReport:
    """Summaries, missing counts, correlation and the raw/cleaned trend pair."""
    config = config or PipelineConfig()
    raw_trend, cleaned_trend = compare_trends(raw, cleaned, config.trend_predictor, config.target)

    categorical = cleaned.select_dtypes(exclude=["number"]).columns
    report = EDAReport(
        raw_summary=describe_columns(raw),
        cleaned_summary=describe_columns(cleaned),
        sanitized_comparison=compare_summaries(raw, cleaned, config.sanitized_columns),
        missing=missing_summary(raw, cleaned),
        correlation=correlation_matrix(cleaned),
        raw_trend=raw_trend,
        cleaned_trend=cleaned_trend,
        value_counts={col: cleaned[col].value_counts(dropna=False) for col in categorical},
    )
    logger.info(
        "Report built: slope %s/%s raw=%.3f cleaned=%.3f",
        config.target,
        config.trend_predictor,
        raw_trend.slope,
        cleaned_trend.slope,
    )
    return report
