"""Query execution capability used by the paginator."""

from collections.abc import Sequence
from typing import Any, Protocol

import duckdb

from . import logger
from .errors import QueryExecutionError


class Cursor(Protocol):
    """The DB-API subset a row mapper may rely on."""

    @property
    def description(self) -> Any: ...

    def fetchone(self) -> Any: ...

    def fetchall(self) -> list[Any]: ...

    def close(self) -> None: ...


class QueryExecutor(Protocol):
    """Run SQL with positional bind parameters."""

    def scalar(self, sql: str, parameters: Sequence[Any]) -> Any:
        """Return the first column of the first row."""
        ...

    def query(self, sql: str, parameters: Sequence[Any]) -> Cursor:
        """Return a cursor positioned before the first result row."""
        ...


class ConnectionCursor:
    """Read the pending result of a connection the caller keeps open.

    Closing does not close the connection, which stays owned by the caller.
    """

    def __init__(self, connection: duckdb.DuckDBPyConnection):
        self.connection = connection

    @property
    def description(self) -> Any:
        return self.connection.description

    def fetchone(self) -> Any:
        return self.connection.fetchone()

    def fetchall(self) -> list[Any]:
        return self.connection.fetchall()

    def close(self) -> None:
        pass


class DuckDBExecutor:
    """Execute statements on a DuckDB connection owned by the caller.

    Count and page queries share that connection, so both see its temp tables
    and the uncommitted rows of an open transaction.
    """

    def __init__(self, connection: duckdb.DuckDBPyConnection):
        self.connection = connection

    def scalar(self, sql: str, parameters: Sequence[Any]) -> Any:
        logger.debug("Executing scalar query: %s params=%s", sql, list(parameters))
        try:
            row = self.connection.execute(sql, list(parameters) or None).fetchone()
        except duckdb.Error as exc:
            raise QueryExecutionError(str(exc), sql=sql) from exc
        if row is None:
            raise QueryExecutionError("scalar query returned no rows", sql=sql)
        return row[0]

    def query(self, sql: str, parameters: Sequence[Any]) -> Cursor:
        logger.debug("Executing query: %s params=%s", sql, list(parameters))
        try:
            self.connection.execute(sql, list(parameters) or None)
        except duckdb.Error as exc:
            raise QueryExecutionError(str(exc), sql=sql) from exc
        return ConnectionCursor(self.connection)
