"""Pydantic envelope returned for a fetched page."""

from typing import Generic, TypeVar

from pydantic import BaseModel

E = TypeVar("E")


class Page(BaseModel, Generic[E]):
    data: list[E]
    next_page: int | None = None
    count: int
    previous_page: int | None = None
