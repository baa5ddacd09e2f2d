"""
Data Engine - loads, joins and sanitizes the insurance tables
"""
from .cleaner import (
    OutlierBounds,
    SanitizationReport,
    flag_outliers,
    recode_sentinel,
    robust_bounds,
    sanitize,
)
from .errors import (
    DatabaseConnectionError,
    InsufficientDataError,
    InsuranceEDAError,
    JoinCardinalityError,
    SchemaError,
)
from .joiner import join_tables
from .loader import LoadedTables, load_tables

__all__ = [
    "load_tables",
    "LoadedTables",
    "join_tables",
    "sanitize",
    "recode_sentinel",
    "robust_bounds",
    "flag_outliers",
    "OutlierBounds",
    "SanitizationReport",
    "InsuranceEDAError",
    "DatabaseConnectionError",
    "SchemaError",
    "JoinCardinalityError",
    "InsufficientDataError",
]
