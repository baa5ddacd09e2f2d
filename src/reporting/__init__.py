"""
Reporting - summaries, raw vs cleaned trend lines and charts
"""
from .report import EDAReport, build_report
from .summary import compare_summaries, correlation_matrix, describe_columns, missing_summary
from .trend import TrendLine, compare_trends, fit_trend, shared_axis_limits

__all__ = [
    "build_report",
    "EDAReport",
    "describe_columns",
    "missing_summary",
    "compare_summaries",
    "correlation_matrix",
    "fit_trend",
    "compare_trends",
    "shared_axis_limits",
    "TrendLine",
]
