"""Dotted attribute-path resolution against SQLAlchemy mappers.

A path such as "customer.city" is split into segments and each segment is
looked up in the mapper of the class reached by the previous segment.  The
mapper's attribute registry is the only source of truth; nothing is
resolved by getattr() on instances.

Segment lookup is exact first, then a unique match ignoring case and
underscores, so "Customer.City" and "OrderDate" resolve to customer.city
and order_date.
"""

from __future__ import annotations

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import ColumnProperty, MapperProperty, RelationshipProperty


def _normalize(name: str) -> str:
    return name.replace("_", "").lower()


def lookup_attribute(entity: type, name: str) -> MapperProperty | None:
    """Return the mapped attribute called name on entity, or None."""
    mapper = sa_inspect(entity, raiseerr=False)
    if mapper is None or not hasattr(mapper, "attrs"):
        return None
    attrs = mapper.attrs
    if name in attrs:
        return attrs[name]
    wanted = _normalize(name)
    matches = [prop for prop in attrs if _normalize(prop.key) == wanted]
    return matches[0] if len(matches) == 1 else None


def walk_path(entity: type, path: str, error: type[Exception]) -> list[MapperProperty]:
    """Resolve every segment of path, starting at entity.

    Intermediate segments must be relationships.  Returns the resolved
    properties in path order; raises error(path, reason) on the first
    segment that cannot be resolved.
    """
    if not path or not path.strip():
        raise error(path, "path is empty")

    segments = [segment.strip() for segment in path.split(".")]
    current = entity
    steps: list[MapperProperty] = []
    for index, segment in enumerate(segments):
        if not segment:
            raise error(path, "path contains an empty segment")
        prop = lookup_attribute(current, segment)
        if prop is None:
            raise error(path, f"{current.__name__} has no mapped attribute {segment!r}")
        steps.append(prop)

        is_last = index == len(segments) - 1
        if isinstance(prop, RelationshipProperty):
            current = prop.mapper.class_
        elif not is_last:
            raise error(path, f"{current.__name__}.{prop.key} is not a relationship")
    return steps


def is_column(prop: MapperProperty) -> bool:
    return isinstance(prop, ColumnProperty)


def is_scalar_relationship(prop: MapperProperty) -> bool:
    return isinstance(prop, RelationshipProperty) and not prop.uselist


def is_relationship(prop: MapperProperty) -> bool:
    return isinstance(prop, RelationshipProperty)
