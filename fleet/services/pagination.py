"""Page normalisation and paged result metadata."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from fleet.schemas.common import LinkDto

T = TypeVar("T")

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PagingParameters:
    """Requested page, normalised on construction so it can never be invalid.

    Page numbers below 1 fall back to the first page and page sizes outside
    ``(0, MAX_PAGE_SIZE]`` fall back to the default size. The two values are
    normalised independently.
    """

    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        page_number = self.page_number if self.page_number and self.page_number > 0 else DEFAULT_PAGE_NUMBER
        page_size = (
            self.page_size
            if self.page_size and 0 < self.page_size <= MAX_PAGE_SIZE
            else DEFAULT_PAGE_SIZE
        )
        object.__setattr__(self, "page_number", page_number)
        object.__setattr__(self, "page_size", page_size)

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass
class PagedResult(Generic[T]):
    items: list[T]
    current_page: int
    page_size: int
    total_items: int
    links: list[LinkDto] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        if len(self.items) > self.page_size:
            raise ValueError("a page cannot hold more items than its page size")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


def paginate(db: Session, statement: Select, params: PagingParameters) -> PagedResult:
    """Count ``statement``'s rows and fetch the slice for ``params``."""
    total_items = db.execute(select(func.count()).select_from(statement.order_by(None).subquery())).scalar_one()
    # Pages past the end skip the slice query; their offset may not even fit a bound integer.
    items = []
    if params.offset < total_items:
        items = list(db.execute(statement.offset(params.offset).limit(params.limit)).scalars().all())
    return PagedResult(
        items=items,
        current_page=params.page_number,
        page_size=params.page_size,
        total_items=total_items,
    )
