"""Exceptions raised while counting, validating and fetching pages."""


class PaginationError(Exception):
    """Base class for every pagination failure."""


class QueryExecutionError(PaginationError):
    """Raised when the database rejects or fails to run a statement."""

    def __init__(self, message: str, sql: str | None = None):
        self.sql = sql
        super().__init__(message)


class MappingError(PaginationError):
    """Raised when result rows cannot be converted into entities."""


class InvalidPageError(PaginationError, ValueError):
    """Raised when the requested page falls outside the result set."""


class ConfigurationError(PaginationError):
    """Raised when the configured database cannot be opened."""
