"""Sort-by-attribute-path resolver.

resolve_sort(Order, "customer.city", "Descending") walks the path through
the mapper registry once, builds one aliased LEFT OUTER JOIN per
relationship hop, and returns a SortOrder whose apply() adds those joins
and the ORDER BY to any select over Order.

Resolution happens before any statement executes, and results are cached
per (entity, path, direction) because they depend on nothing else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from sqlalchemy import Select
from sqlalchemy.orm import aliased

from repokit.domain.models.enums import SortDirection
from repokit.exceptions import InvalidSortPath

from .paths import is_column, is_scalar_relationship, walk_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SortOrder:
    """A resolved, reusable ordering for one entity type."""

    entity: type
    path: str
    direction: SortDirection
    joins: tuple[Any, ...]  # relationship attributes bound to their join aliases
    column: Any

    def apply(self, stmt: Select) -> Select:
        for onclause in self.joins:
            stmt = stmt.outerjoin(onclause)
        key = self.column.desc() if self.direction is SortDirection.DESCENDING else self.column.asc()
        return stmt.order_by(key)


def resolve_sort(
    entity: type, path: str, direction: SortDirection | str | None = SortDirection.ASCENDING
) -> SortOrder:
    """Resolve path on entity into a SortOrder.  Raises InvalidSortPath."""
    return _resolve(entity, path, SortDirection.parse(direction))


@lru_cache(maxsize=512)
def _resolve(entity: type, path: str, direction: SortDirection) -> SortOrder:
    steps = walk_path(entity, path, InvalidSortPath)
    *hops, last = steps
    if not is_column(last):
        raise InvalidSortPath(path, f"{last.key!r} is not a column")

    parent: Any = entity
    joins = []
    for depth, hop in enumerate(hops):
        if not is_scalar_relationship(hop):
            raise InvalidSortPath(path, f"{hop.key!r} is a collection")
        target = aliased(hop.mapper.class_, name=f"sort_{depth}_{hop.key}")
        joins.append(getattr(parent, hop.key).of_type(target))
        parent = target

    logger.debug("Resolved sort %s.%s %s", entity.__name__, path, direction.value)
    return SortOrder(
        entity=entity,
        path=path,
        direction=direction,
        joins=tuple(joins),
        column=getattr(parent, last.key),
    )


def clear_sort_cache() -> None:
    _resolve.cache_clear()
