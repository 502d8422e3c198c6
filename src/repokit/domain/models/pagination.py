"""Paging value objects: request settings and the page envelope.

Pure domain objects with no ORM or persistence concerns.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repokit.exceptions import InvalidPaginationSettings

from .enums import SortDirection

T = TypeVar("T")


class PaginationSettings(BaseModel):
    """What page to fetch and how to order it.

    order_column is a dotted attribute path on the queried entity
    (e.g. "customer.city").  skip is derived from page and page_size on
    every read, so the two can never drift apart.  Assignments are
    re-validated; a non-positive page_size or a page below 1 raises
    InvalidPaginationSettings and leaves the previous value in place.
    """

    model_config = ConfigDict(validate_assignment=True)

    order_column: str
    page: int = 1
    page_size: int = 10
    order_direction: SortDirection = SortDirection.ASCENDING
    search: str | None = None

    @field_validator("order_direction", mode="before")
    @classmethod
    def _parse_direction(cls, value: Any) -> SortDirection:
        return SortDirection.parse(value)

    @field_validator("page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value <= 0:
            raise InvalidPaginationSettings(f"page_size must be positive, got {value}")
        return value

    @field_validator("page")
    @classmethod
    def _check_page(cls, value: int) -> int:
        if value < 1:
            raise InvalidPaginationSettings(f"page must be 1 or greater, got {value}")
        return value

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @classmethod
    def for_page(
        cls,
        order_column: str,
        page_size: int,
        page: int,
        order_direction: SortDirection | str = SortDirection.ASCENDING,
    ) -> PaginationSettings:
        """Named constructor mirroring the (column, size, page) call order."""
        return cls(
            order_column=order_column,
            page=page,
            page_size=page_size,
            order_direction=order_direction,
        )


class PagedResult(BaseModel, Generic[T]):
    """One page of query results plus the size of the whole result set.

    records and pages are computed on read from the current field values,
    never stored.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    page: int
    total_records: int
    page_size: int
    data: list[T] = Field(default_factory=list)

    @property
    def records(self) -> int:
        return len(self.data)

    @property
    def pages(self) -> int:
        if self.page_size <= 0:
            raise InvalidPaginationSettings(f"page_size must be positive, got {self.page_size}")
        return -(-self.total_records // self.page_size)
