"""Database configuration resolved from the environment."""

from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
import os

import duckdb

from . import logger
from .errors import ConfigurationError

DB_ENV_VAR = "PAGINATION_DB_PATH"
PAGE_SIZE_ENV_VAR = "PAGINATION_PAGE_SIZE"
DEFAULT_PAGE_SIZE = 20
MEMORY_DB = ":memory:"


@lru_cache(maxsize=1)
def get_db_path() -> Path | None:
    """Resolve the DuckDB file from the environment; ``None`` means in-memory."""
    env_override = os.environ.get(DB_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser()
    return None


@lru_cache(maxsize=1)
def get_default_page_size() -> int:
    raw = os.environ.get(PAGE_SIZE_ENV_VAR)
    if not raw:
        return DEFAULT_PAGE_SIZE
    try:
        page_size = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{PAGE_SIZE_ENV_VAR} must be an integer, got {raw!r}"
        ) from exc
    if page_size < 1:
        raise ConfigurationError(f"{PAGE_SIZE_ENV_VAR} must be greater than 0")
    return page_size


@contextmanager
def connect(
    db_path: Path | None = None, read_only: bool = False
) -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """Yield a DuckDB connection and close it afterwards.

    ``read_only`` applies to database files only; an in-memory database is
    always writable.
    """
    path = db_path if db_path is not None else get_db_path()
    if path is None:
        database = MEMORY_DB
        read_only = False
    else:
        if not path.exists():
            raise ConfigurationError(
                f"DuckDB file not found at {path}. "
                f"Set {DB_ENV_VAR} to override the location."
            )
        database = str(path)

    logger.debug("Opening DuckDB database: %s", database)
    try:
        connection = duckdb.connect(database, read_only=read_only)
    except duckdb.Error as exc:
        raise ConfigurationError(f"Cannot open DuckDB database {database}: {exc}") from exc
    try:
        yield connection
    finally:
        connection.close()
