"""
Linear trend of the target against one predictor, fitted with sklearn.
Fitted independently on raw and cleaned data so the two lines can be overlaid.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression

from ..data_engine.errors import InsufficientDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrendLine:
    """y = intercept + slope * x"""
    label: str
    intercept: float
    slope: float
    n: int

    def predict(self, x) -> np.ndarray:
        return self.intercept + self.slope * np.asarray(x, dtype=float)


def fit_trend(df: pd.DataFrame, x: str, y: str, label: str) -> TrendLine:
    """
    Fit y ~ x on the rows where both are present.

    Raises:
        InsufficientDataError: fewer than two usable rows
    """
    work = df[[x, y]].apply(pd.to_numeric, errors="coerce").dropna()
    if len(work) < 2:
        raise InsufficientDataError(
            f"Need at least 2 rows with both '{x}' and '{y}' to fit a trend ({label}); got {len(work)}."
        )

    model = LinearRegression()
    model.fit(work[[x]].to_numpy(), work[y].to_numpy())
    line = TrendLine(
        label=label,
        intercept=float(model.intercept_),
        slope=float(model.coef_[0]),
        n=len(work),
    )
    logger.info("Trend %s: %s = %.3f + %.3f * %s (n=%d)", label, y, line.intercept, line.slope, x, line.n)
    return line


def compare_trends(
    raw: pd.DataFrame,
    cleaned: pd.DataFrame,
    x: str,
    y: str,
) -> Tuple[TrendLine, TrendLine]:
    """Fit the same trend on raw and cleaned data, labelled "raw" and "cleaned"."""
    return fit_trend(raw, x, y, "raw"), fit_trend(cleaned, x, y, "cleaned")


def shared_axis_limits(
    frames: Sequence[pd.DataFrame],
    x: str,
    y: str,
    pad: float = 0.05,
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Axis ranges used by every panel of a raw-vs-cleaned comparison.

    Limits come from the last frame (the cleaned one), so raw outliers
    fall off-canvas instead of flattening the visible trend.
    """
    if not frames:
        raise ValueError("shared_axis_limits needs at least one frame")
    reference = frames[-1]

    def _limits(series: pd.Series) -> Tuple[float, float]:
        values = pd.to_numeric(series, errors="coerce").dropna()
        if values.empty:
            raise InsufficientDataError(f"Column '{series.name}' has no values to scale an axis.")
        lo, hi = float(values.min()), float(values.max())
        margin = (hi - lo) * pad if hi > lo else max(abs(lo) * pad, 1.0)
        return lo - margin, hi + margin

    return _limits(reference[x]), _limits(reference[y])
