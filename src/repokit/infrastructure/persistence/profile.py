"""Per-entity capabilities consumed by the generic repository.

An EntityProfile tells SqlRepository what differs between entity types:
which conditions scope every query (e.g. soft-delete exclusion), how a key
maps to a WHERE clause, which relationships to eager-load by default, and
which columns free-text search looks at.  Subclass it, or pass the
keyword arguments, instead of subclassing the repository.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, and_, inspect as sa_inspect, or_

from .paths import is_column, lookup_attribute

T = TypeVar("T")
K = TypeVar("K")


class EntityProfile(Generic[T, K]):
    def __init__(
        self,
        entity: type[T],
        *,
        scope: Callable[[], Sequence[ColumnElement[bool]]] | None = None,
        includes: Sequence[str] = (),
        search_columns: Sequence[str] = (),
    ) -> None:
        self.entity = entity
        self._scope = scope
        self.includes = tuple(includes)
        self._search_columns = tuple(self._column(name) for name in search_columns)

    def _column(self, name: str) -> Any:
        prop = lookup_attribute(self.entity, name)
        if prop is None or not is_column(prop):
            raise ValueError(f"{self.entity.__name__} has no column {name!r} to search")
        return getattr(self.entity, prop.key)

    def fixed_conditions(self) -> Sequence[ColumnElement[bool]]:
        """Conditions applied to every query, with or without a user predicate."""
        return tuple(self._scope()) if self._scope is not None else ()

    def key_condition(self, key: K) -> ColumnElement[bool]:
        primary_key = sa_inspect(self.entity).primary_key
        if len(primary_key) == 1:
            return primary_key[0] == key
        return and_(*(column == value for column, value in zip(primary_key, key, strict=True)))

    def search_condition(self, term: str | None) -> ColumnElement[bool] | None:
        """OR of case-insensitive substring matches, or None when not searchable."""
        if not term or not term.strip() or not self._search_columns:
            return None
        pattern = f"%{term.strip()}%"
        return or_(*(column.ilike(pattern) for column in self._search_columns))
