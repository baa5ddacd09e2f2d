"""
Sanitizer - sentinel recoding and robust (median/MAD) outlier flagging.
Handles: sentinel-coded missing ages, implausible BMI values
Returns: Raw copy + cleaned DataFrame + SanitizationReport
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import pandas as pd
from scipy.stats import median_abs_deviation

from ..config import PipelineConfig
from .errors import InsufficientDataError, SchemaError

logger = logging.getLogger(__name__)

# Key under which sanitize() records the bound it applied on the cleaned frame
BOUNDS_ATTR = "outlier_bounds"

MadScale = Union[float, str]


@dataclass(frozen=True)
class OutlierBounds:
    """Inlier interval [lower, upper] = median -/+ multiplier * MAD."""
    column: str
    median: float
    mad: float
    multiplier: float
    scale: MadScale
    lower: float
    upper: float

    def contains(self, values: pd.Series) -> pd.Series:
        """True where a value lies inside the bound; NaN counts as inside."""
        return ~((values < self.lower) | (values > self.upper))


@dataclass
class SanitizationReport:
    """Summary of the corrections applied to one dataset."""
    rows: int = 0
    sentinel_column: str = ""
    sentinel_value: float = 0
    sentinel_replaced: int = 0
    outlier_column: str = ""
    outliers_flagged: int = 0
    bounds: Optional[OutlierBounds] = None
    missing_before: Dict[str, int] = field(default_factory=dict)
    missing_after: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for display."""
        return {
            "rows": self.rows,
            "sentinel_column": self.sentinel_column,
            "sentinel_value": self.sentinel_value,
            "sentinel_replaced": self.sentinel_replaced,
            "outlier_column": self.outlier_column,
            "outliers_flagged": self.outliers_flagged,
            "bounds": {
                "median": self.bounds.median,
                "mad": self.bounds.mad,
                "multiplier": self.bounds.multiplier,
                "scale": self.bounds.scale,
                "lower": self.bounds.lower,
                "upper": self.bounds.upper,
            } if self.bounds else None,
            "missing_before": self.missing_before,
            "missing_after": self.missing_after,
        }


def recode_sentinel(df: pd.DataFrame, column: str = "age", sentinel: float = -999) -> pd.DataFrame:
    """Replace values exactly equal to `sentinel` with NaN. Near misses are kept."""
    out = df.copy()
    out[column] = out[column].mask(out[column] == sentinel)
    return out


def robust_bounds(
    values: pd.Series,
    multiplier: float = 5.0,
    scale: MadScale = 1.0,
    column: Optional[str] = None,
) -> OutlierBounds:
    """
    Compute median -/+ multiplier * MAD over the non-missing values.

    Args:
        values: Numeric series; NaN is ignored
        multiplier: Width of the bound in MADs
        scale: 1.0 for the raw MAD, "normal" for the 1.4826 consistency factor

    Raises:
        InsufficientDataError: no non-missing values
    """
    clean = pd.to_numeric(values, errors="coerce").dropna().to_numpy(dtype=float)
    name = column if column is not None else str(values.name)
    if clean.size == 0:
        raise InsufficientDataError(
            f"Column '{name}' has no non-missing values; median/MAD are undefined."
        )

    med = float(np.median(clean))
    mad = float(median_abs_deviation(clean, scale=scale))
    return OutlierBounds(
        column=name,
        median=med,
        mad=mad,
        multiplier=multiplier,
        scale=scale,
        lower=med - multiplier * mad,
        upper=med + multiplier * mad,
    )


def flag_outliers(
    df: pd.DataFrame,
    column: str = "bmi",
    multiplier: float = 5.0,
    scale: MadScale = 1.0,
    bounds: Optional[OutlierBounds] = None,
) -> Tuple[pd.DataFrame, OutlierBounds]:
    """
    Set values strictly outside the robust bound to NaN.

    When `bounds` is given it is applied as-is instead of being recomputed.
    A zero MAD flags every value that differs from the median.
    """
    if bounds is None:
        bounds = robust_bounds(df[column], multiplier=multiplier, scale=scale, column=column)
    out = df.copy()
    out[column] = out[column].where(bounds.contains(out[column]))
    return out, bounds


def sanitize(
    df: pd.DataFrame,
    config: Optional[PipelineConfig] = None,
    bounds: Optional[OutlierBounds] = None,
) -> Tuple[pd.DataFrame, pd.DataFrame, SanitizationReport]:
    """
    Apply both corrective passes to a joined dataset.

    Steps:
    - Sentinel values in config.sentinel_column -> NaN
    - Robust outliers in config.outlier_column -> NaN

    The two passes touch different columns and are independent of each other.
    The applied bound is stored in cleaned.attrs, so sanitizing an already
    cleaned frame reuses it and changes nothing.

    Args:
        df: Joined InsuranceRecord frame (left untouched)
        config: Column names and thresholds; defaults to PipelineConfig()
        bounds: Bound to apply; defaults to the one recorded on df by an
            earlier sanitize() call, else computed from df

    Returns:
        Tuple of (raw_copy, cleaned_df, SanitizationReport)
    """
    config = config or PipelineConfig()
    columns = list(config.sanitized_columns)
    absent = [c for c in columns if c not in df.columns]
    if absent:
        raise SchemaError(f"Cannot sanitize: missing column(s) {', '.join(absent)}")

    if bounds is None:
        recorded = df.attrs.get(BOUNDS_ATTR)
        if recorded is not None and (recorded.column, recorded.multiplier, recorded.scale) == (
            config.outlier_column, config.mad_multiplier, config.mad_scale
        ):
            bounds = recorded

    raw = df.copy()
    raw.attrs.pop(BOUNDS_ATTR, None)

    report = SanitizationReport(
        rows=len(raw),
        sentinel_column=config.sentinel_column,
        sentinel_value=config.sentinel_value,
        outlier_column=config.outlier_column,
        missing_before={c: int(raw[c].isna().sum()) for c in columns},
    )

    # 1. Sentinel recoding
    cleaned = recode_sentinel(raw, config.sentinel_column, config.sentinel_value)
    report.sentinel_replaced = int(
        cleaned[config.sentinel_column].isna().sum() - raw[config.sentinel_column].isna().sum()
    )

    # 2. Robust outlier flagging
    before = int(cleaned[config.outlier_column].isna().sum())
    cleaned, report.bounds = flag_outliers(
        cleaned,
        config.outlier_column,
        multiplier=config.mad_multiplier,
        scale=config.mad_scale,
        bounds=bounds,
    )
    report.outliers_flagged = int(cleaned[config.outlier_column].isna().sum()) - before
    cleaned.attrs[BOUNDS_ATTR] = report.bounds

    report.missing_after = {c: int(cleaned[c].isna().sum()) for c in columns}
    logger.info(
        "Sanitized %d rows: %d sentinel %s value(s), %d %s outlier(s) outside [%.3f, %.3f]",
        report.rows,
        report.sentinel_replaced,
        config.sentinel_column,
        report.outliers_flagged,
        config.outlier_column,
        report.bounds.lower,
        report.bounds.upper,
    )
    return raw, cleaned, report
