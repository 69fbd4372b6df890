"""Offset/limit pagination over raw parameterized SQL queries."""

import logging
from dataclasses import dataclass

logger = logging.getLogger("pagination")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@dataclass
class PaginationMetrics:
    """Track count queries, page fetches and rejected pages."""

    count_queries: int = 0
    pages_fetched: int = 0
    rows_fetched: int = 0
    validation_failures: int = 0

    def add_count_query(self) -> None:
        self.count_queries += 1
        logger.debug("Ran count query; total=%s", self.count_queries)

    def add_page(self, rows: int) -> None:
        self.pages_fetched += 1
        self.rows_fetched += rows
        logger.debug(
            "Fetched page with %s rows; pages=%s rows=%s",
            rows,
            self.pages_fetched,
            self.rows_fetched,
        )

    def mark_validation_failure(self) -> None:
        self.validation_failures += 1
        logger.debug(
            "Marked validation failure; total=%s", self.validation_failures
        )


from .errors import (  # noqa: E402
    ConfigurationError,
    InvalidPageError,
    MappingError,
    PaginationError,
    QueryExecutionError,
)
from .executor import Cursor, DuckDBExecutor, QueryExecutor  # noqa: E402
from .mappers import dict_rows, model_rows, tuple_rows  # noqa: E402
from .models import Page  # noqa: E402
from .paginator import Paginator  # noqa: E402

__all__ = [
    "ConfigurationError",
    "Cursor",
    "DuckDBExecutor",
    "InvalidPageError",
    "MappingError",
    "Page",
    "PaginationError",
    "PaginationMetrics",
    "Paginator",
    "QueryExecutionError",
    "QueryExecutor",
    "dict_rows",
    "logger",
    "model_rows",
    "tuple_rows",
]
