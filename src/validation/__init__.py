"""
Validation Layer - schema checks for the source tables
"""
from .validator import validate_table, validate_tables, ValidationResult

__all__ = ["validate_table", "validate_tables", "ValidationResult"]
