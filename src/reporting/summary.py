"""
Descriptive summaries for the raw and cleaned datasets.
"""

from typing import Dict, Iterable

import numpy as np
import pandas as pd


def describe_columns(df: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """
    Summary statistics split by column kind.

    Returns:
        {"numeric": count/mean/std/min/quartiles/max,
         "categorical": count/unique/top/freq}
    """
    numeric = df.select_dtypes(include=[np.number])
    categorical = df.select_dtypes(exclude=[np.number])
    return {
        "numeric": numeric.describe() if not numeric.columns.empty else pd.DataFrame(),
        "categorical": categorical.describe() if not categorical.columns.empty else pd.DataFrame(),
    }


def missing_summary(raw: pd.DataFrame, cleaned: pd.DataFrame) -> pd.DataFrame:
    """Missing-value counts per column, before and after sanitizing."""
    out = pd.DataFrame({
        "missing_raw": raw.isna().sum(),
        "missing_cleaned": cleaned.isna().sum(),
    })
    out["added"] = out["missing_cleaned"] - out["missing_raw"]
    return out.astype(int)


def compare_summaries(
    raw: pd.DataFrame,
    cleaned: pd.DataFrame,
    columns: Iterable[str],
) -> pd.DataFrame:
    """Side-by-side describe() of the given columns, raw vs cleaned."""
    columns = list(columns)
    frames = {
        "raw": raw[columns].describe(),
        "cleaned": cleaned[columns].describe(),
    }
    combined = pd.concat(frames, axis=1)
    # Group raw/cleaned under each column: age/raw, age/cleaned, bmi/raw, ...
    combined = combined.swaplevel(0, 1, axis=1)
    return combined.reindex(columns=pd.MultiIndex.from_product([columns, ["raw", "cleaned"]]))


def correlation_matrix(df: pd.DataFrame) -> pd.DataFrame:
    """Pearson correlation of the numeric columns."""
    return df.select_dtypes(include=[np.number]).corr()
