"""Offset/limit pagination wrapped around a caller-supplied SQL query."""

from collections.abc import Callable
from contextlib import closing
from typing import Any, Generic, TypeVar

from . import PaginationMetrics, logger
from .errors import InvalidPageError
from .executor import Cursor, QueryExecutor
from .models import Page

E = TypeVar("E")

RowMapper = Callable[[Cursor], list[E]]

COUNT_QUERY = "select count(*) from ({query})"


class Paginator(Generic[E]):
    """Fetch one page of a raw query together with its navigation metadata.

    A paginator holds mutable state for a single request and is not safe to
    share between threads. Typical use::

        paginator = Paginator(10, 2, DuckDBExecutor(connection))
        paginator.set_raw_query("select id, name from users where active = ?", True)
        paginator.set_order("id DESC")
        envelope = paginator.json(dict_rows)
    """

    def __init__(
        self,
        page_size: int,
        page_number: int,
        executor: QueryExecutor,
        metrics: PaginationMetrics | None = None,
    ):
        self.set_page_size(page_size)
        self.page_number = page_number
        self.executor = executor
        self.metrics = metrics
        self.total_count = 0
        self.order_by = ""
        self.raw_query = ""
        self.params: tuple[Any, ...] = ()
        self.data: list[E] = []

    def get_page_size(self) -> int:
        return self.page_size

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise InvalidPageError("pagination pageSize must be greater than 0")
        self.page_size = page_size

    def set_page(self, page_number: int) -> None:
        self.page_number = page_number

    def set_order(self, *orders: str) -> None:
        """Order by each ``"column [ASC|DESC]"`` spec, in the given order."""
        self.order_by = f" order by {','.join(orders)}" if orders else ""

    def set_raw_query(self, query: str, *params: Any) -> None:
        """Store the base query, without order/limit/offset, and its bind values."""
        self.raw_query = query
        self.params = params

    def set_total_count(self, total_count: int) -> None:
        """Use a known row count instead of running the count query.

        The count is trusted as given; a stale value skews validation and the
        next/previous page numbers.
        """
        self.total_count = total_count

    def set_count_by_query(self) -> None:
        count_query = COUNT_QUERY.format(query=self.raw_query)
        self.total_count = int(self.executor.scalar(count_query, self.params))
        if self.metrics:
            self.metrics.add_count_query()
        logger.debug("Counted %s rows for query: %s", self.total_count, self.raw_query)

    def calculate_offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    def get_query(self) -> str:
        limit = f" limit {self.page_size} offset {self.calculate_offset()}"
        return self.raw_query + self.order_by + limit

    def validate(self) -> None:
        """Reject page numbers below 1 or starting past the last row."""
        if self.page_number < 1:
            self._reject("pagination pageNum cannot be less than 1")
        if self.total_count + self.page_size <= self.page_size * self.page_number:
            self._reject("pagination pageNum and totalCount must be greater than pageSize")

    def _reject(self, message: str) -> None:
        if self.metrics:
            self.metrics.mark_validation_failure()
        logger.warning(
            "Rejected page %s (size=%s, count=%s): %s",
            self.page_number,
            self.page_size,
            self.total_count,
            message,
        )
        raise InvalidPageError(message)

    def run_sql(self, mapper: RowMapper) -> None:
        """Run the bounded query and store the mapped rows as ``data``."""
        query = self.get_query()
        with closing(self.executor.query(query, self.params)) as cursor:
            results = mapper(cursor)

        self.data = results
        if self.metrics:
            self.metrics.add_page(len(results))

    def next_page(self) -> int | None:
        if self.page_number * self.page_size >= self.total_count:
            return None
        return self.page_number + 1

    def previous_page(self) -> int | None:
        page = self.page_number - 1
        if page < 1:
            return None
        return page

    def json(self, mapper: RowMapper) -> dict[str, Any]:
        """Count, validate and fetch the current page.

        Returns a mapping with the keys ``data``, ``next_page``, ``count`` and
        ``previous_page``. The first failing step raises and the remaining
        steps are skipped.
        """
        self.set_count_by_query()
        self.validate()
        self.run_sql(mapper)

        logger.info(
            "Fetched page %s (%s rows of %s)",
            self.page_number,
            len(self.data),
            self.total_count,
        )
        return {
            "data": self.data,
            "next_page": self.next_page(),
            "count": self.total_count,
            "previous_page": self.previous_page(),
        }

    def page(self, mapper: RowMapper) -> Page[Any]:
        return Page(**self.json(mapper))
