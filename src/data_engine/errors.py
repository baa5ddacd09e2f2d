"""
Error taxonomy for the insurance pipeline.
Nothing here is retried; every error surfaces to the operator.
"""


class InsuranceEDAError(Exception):
    """Base class for all pipeline errors."""


class DatabaseConnectionError(InsuranceEDAError, ConnectionError):
    """The storage backend could not be opened or read."""


class SchemaError(InsuranceEDAError):
    """An expected table or column is absent."""


class JoinCardinalityError(SchemaError):
    """A join key on the right-hand side is not unique, so rows would multiply."""


class InsufficientDataError(InsuranceEDAError, ValueError):
    """Too few non-missing values to compute a statistic."""
