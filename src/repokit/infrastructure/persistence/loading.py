"""Eager-load options from dotted relationship paths."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import QueryableAttribute, selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from repokit.exceptions import InvalidIncludePath

from .paths import is_relationship, walk_path


def include_options(entity: type, *includes: str | QueryableAttribute[Any]) -> list[LoaderOption]:
    """Build one selectinload chain per include.

    An include is either a dotted path ("orders.lines") or a relationship
    attribute (Customer.orders).  Every path segment must be a relationship.
    """
    options: list[LoaderOption] = []
    for include in includes:
        if not isinstance(include, str):
            options.append(selectinload(include))
            continue

        loader = None
        parent = entity
        for step in walk_path(entity, include, InvalidIncludePath):
            if not is_relationship(step):
                raise InvalidIncludePath(include, f"{step.key!r} is not a relationship")
            attribute = getattr(parent, step.key)
            loader = selectinload(attribute) if loader is None else loader.selectinload(attribute)
            parent = step.mapper.class_
        options.append(loader)
    return options
