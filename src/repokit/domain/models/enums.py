"""Domain enumerations for paging and entity lifecycle.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (Pydantic default behaviour).
"""

from __future__ import annotations

from enum import Enum


class SortDirection(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"

    @classmethod
    def parse(cls, value: object) -> SortDirection:
        """Map free-form input to a direction.

        Only the exact token "Descending" means descending; anything else,
        including "desc", None and the empty string, sorts ascending.
        """
        if isinstance(value, SortDirection):
            return value
        if value == cls.DESCENDING.value:
            return cls.DESCENDING
        return cls.ASCENDING


class LifecyclePhase(str, Enum):
    """Notification channels around repository mutations.

    Persist phases wrap add(), save phases wrap update(), remove phases
    wrap remove().
    """

    BEFORE_PERSIST = "before_persist"
    AFTER_PERSIST = "after_persist"
    BEFORE_SAVE = "before_save"
    AFTER_SAVE = "after_save"
    BEFORE_REMOVE = "before_remove"
    AFTER_REMOVE = "after_remove"
