"""Exception hierarchy for the capacity reporter."""


class CapacityReporterError(Exception):
    """Base class for all capacity reporter failures."""


class ConfigurationError(CapacityReporterError):
    """Raised when required settings are missing or malformed."""


class CollectorInitError(CapacityReporterError):
    """Raised when the query client cannot be constructed."""


class QueryExecutionError(CapacityReporterError):
    """Raised when a query fails on the network or on the backend."""


class QueryTimeoutError(QueryExecutionError):
    """Raised when the query deadline is exceeded."""


class ResultExtractionError(CapacityReporterError):
    """Raised when a query response cannot be reduced to a single value."""


class EmptyResultError(ResultExtractionError):
    """Raised when the backend returns a vector with no samples."""

    def __init__(self, message: str = (
        "empty result returned, please check whether the cluster "
        "is added to Thanos query or not"
    )):
        super().__init__(message)


class UnexpectedResponseShapeError(ResultExtractionError):
    """Raised when the response is not vector-shaped."""


class InvalidSampleValueError(ResultExtractionError):
    """Raised when a sample value is NaN, infinite or outside the int64 range."""
