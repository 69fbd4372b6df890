"""Row mappers turning a result cursor into a list of entities."""

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import MappingError
from .executor import Cursor

ModelT = TypeVar("ModelT", bound=BaseModel)


def _column_names(cursor: Cursor) -> list[str]:
    return [desc[0] for desc in (cursor.description or [])]


def tuple_rows(cursor: Cursor) -> list[tuple[Any, ...]]:
    """Return every remaining row as a tuple."""
    return [tuple(row) for row in cursor.fetchall()]


def dict_rows(cursor: Cursor) -> list[dict[str, Any]]:
    """Return every remaining row keyed by column name."""
    columns = _column_names(cursor)
    if not columns:
        return []

    return [dict(zip(columns, row)) for row in cursor.fetchall()]


def model_rows(model: type[ModelT]) -> Callable[[Cursor], list[ModelT]]:
    """Build a mapper validating each row into ``model``.

    Columns are matched to model fields by name, so the query must alias its
    columns the way the model names its fields.
    """

    def mapper(cursor: Cursor) -> list[ModelT]:
        try:
            return [model.model_validate(row) for row in dict_rows(cursor)]
        except ValidationError as exc:
            raise MappingError(
                f"Cannot map rows to {model.__name__}: {exc}"
            ) from exc

    return mapper
