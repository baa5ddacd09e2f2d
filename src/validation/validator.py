"""
Validation Layer - schema checks for the source tables.
Reports every missing column at once instead of failing on the first one.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
import pandas as pd


@dataclass
class ValidationResult:
    """Result of table validation."""
    is_valid: bool
    errors: List[str] = None
    warnings: List[str] = None

    def __post_init__(self):
        if self.errors is None:
            self.errors = []
        if self.warnings is None:
            self.warnings = []


# Expected schema per source table
FEATURE_COLUMNS = ("id", "age", "sex", "bmi", "children", "smoker", "region")
LINK_COLUMNS = ("id1", "id2")
TARGET_COLUMNS = ("id", "charges")

MAX_MISSING_PCT = 0.3  # warn above 30% missing in any expected column


def validate_table(
    df: pd.DataFrame,
    table_name: str,
    required_columns: Iterable[str],
    max_missing_pct: float = MAX_MISSING_PCT,
) -> ValidationResult:
    """
    Check that a loaded table carries the columns the pipeline relies on.

    Args:
        df: Table as loaded from storage
        table_name: Name used in messages
        required_columns: Columns that must be present (extra columns are allowed)
        max_missing_pct: Fraction of missing values above which a warning is raised

    Returns:
        ValidationResult with is_valid, errors, and warnings
    """
    errors: List[str] = []
    warnings: List[str] = []

    required = list(required_columns)
    missing = [col for col in required if col not in df.columns]
    if missing:
        errors.append(
            f"Table '{table_name}' is missing expected column(s): {', '.join(missing)}. "
            f"Found: {', '.join(map(str, df.columns)) or 'none'}."
        )

    if len(df) == 0:
        warnings.append(f"Table '{table_name}' has no rows.")
    else:
        for col in required:
            if col not in df.columns:
                continue
            missing_pct = df[col].isna().mean()
            if missing_pct > max_missing_pct:
                warnings.append(
                    f"Column '{table_name}.{col}' has {missing_pct:.1%} missing values."
                )

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


def validate_tables(
    tables: Dict[str, pd.DataFrame],
    schema: Optional[Dict[str, Iterable[str]]] = None,
) -> ValidationResult:
    """Validate several tables at once against {table_name: required_columns}."""
    schema = schema or {}
    errors: List[str] = []
    warnings: List[str] = []
    for name, df in tables.items():
        result = validate_table(df, name, schema.get(name, ()))
        errors.extend(result.errors)
        warnings.extend(result.warnings)
    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)
