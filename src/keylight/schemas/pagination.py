"""Offset pagination schemas."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20
MAX_PAGE = 100_000


class Pagination(BaseModel):
    """Page position metadata, serialized in camelCase (``pageSize``, ``hasNext``...).

    Pages are 1-based. An empty result has zero pages and both flags false.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_counts(cls, page: int, page_size: int, total_count: int) -> "Pagination":
        total_pages = math.ceil(total_count / page_size) if page_size > 0 else 0
        return cls(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1 and total_pages > 0,
        )


class Page(BaseModel, Generic[T]):
    """One page of records plus its position."""

    data: list[T]
    pagination: Pagination


def clamp_page(page: int | None) -> int:
    """Pages run from 1 to MAX_PAGE; out-of-range values are pulled to the nearest end."""
    return min(MAX_PAGE, max(1, page or 1))


def clamp_page_size(page_size: int | None) -> int:
    """Bound the page size to 1..MAX_PAGE_SIZE, defaulting when missing."""
    if not page_size:
        return DEFAULT_PAGE_SIZE
    return min(MAX_PAGE_SIZE, max(1, page_size))
