"""Lazy, composable query over one entity type.

A Query only records what to fetch.  Every builder method returns a new
Query; nothing touches the store until a terminal call (to_list, first,
count, or async iteration).  The statement is assembled in a fixed order
whatever order the builder methods were called in:

    conditions -> ordering (with its joins) -> projection -> offset/limit

count() ignores ordering, projection and paging so it always reports the
number of matching entities.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, select

from repokit.domain.models.enums import SortDirection

from .ordering import SortOrder, resolve_sort
from .store import SessionStore

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class Projection:
    """Columns to fetch instead of whole entities, and how to shape each row.

    With into set, each row becomes into(**row_mapping) (e.g. a Pydantic
    model).  Without it a single column yields bare values and several
    columns yield Row tuples.
    """

    columns: tuple[Any, ...]
    into: Callable[..., Any] | None = None

    def shape(self, row: Any) -> Any:
        if self.into is not None:
            return self.into(**row._mapping)
        if len(self.columns) == 1:
            return row[0]
        return row


def columns(*cols: Any, into: Callable[..., Any] | None = None) -> Projection:
    return Projection(columns=tuple(cols), into=into)


def as_projection(value: Any) -> Projection | None:
    """Accept a Projection, a sequence of columns, or a single column."""
    if value is None or isinstance(value, Projection):
        return value
    if isinstance(value, Sequence) and not isinstance(value, str):
        return Projection(columns=tuple(value))
    return Projection(columns=(value,))


@dataclass(frozen=True, eq=False)
class Query(Generic[T]):
    store: SessionStore
    entity: type[T]
    conditions: tuple[ColumnElement[bool], ...] = ()
    sort: SortOrder | None = None
    projection: Projection | None = None
    loader_options: tuple[Any, ...] = field(default=())
    skip: int | None = None
    take: int | None = None

    # --- builders ---

    def where(self, *conditions: ColumnElement[bool] | None) -> Query[T]:
        added = tuple(c for c in conditions if c is not None)
        return replace(self, conditions=self.conditions + added)

    def order_by(
        self, path: str, direction: SortDirection | str | None = SortDirection.ASCENDING
    ) -> Query[T]:
        """Order by a dotted attribute path.  Raises InvalidSortPath immediately."""
        return self.sorted(resolve_sort(self.entity, path, direction))

    def sorted(self, sort: SortOrder) -> Query[T]:
        return replace(self, sort=sort)

    def select(self, projection: Any) -> Query[Any]:
        return replace(self, projection=as_projection(projection))

    def options(self, *options: Any) -> Query[T]:
        return replace(self, loader_options=self.loader_options + options)

    def offset(self, skip: int) -> Query[T]:
        return replace(self, skip=skip)

    def limit(self, take: int) -> Query[T]:
        return replace(self, take=take)

    # --- statements ---

    def filtered_statement(self) -> Select:
        stmt = select(self.entity)
        if self.conditions:
            stmt = stmt.where(*self.conditions)
        return stmt

    def statement(self) -> Select:
        if self.projection is None:
            stmt = select(self.entity)
        else:
            stmt = select(*self.projection.columns).select_from(self.entity)
        if self.conditions:
            stmt = stmt.where(*self.conditions)
        if self.sort is not None:
            stmt = self.sort.apply(stmt)
        if self.loader_options and self.projection is None:
            stmt = stmt.options(*self.loader_options)
        if self.skip:
            stmt = stmt.offset(self.skip)
        if self.take is not None:
            stmt = stmt.limit(self.take)
        return stmt

    # --- terminals ---

    async def to_list(self) -> list[Any]:
        stmt = self.statement()
        if self.projection is None:
            return await self.store.scalars(stmt)
        return [self.projection.shape(row) for row in await self.store.rows(stmt)]

    async def first(self) -> Any | None:
        items = await self.limit(1).to_list()
        return items[0] if items else None

    async def count(self) -> int:
        return await self.store.count(self.filtered_statement())

    async def __aiter__(self) -> AsyncIterator[Any]:
        for item in await self.to_list():
            yield item
