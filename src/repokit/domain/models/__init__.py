"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .enums import LifecyclePhase, SortDirection
from .events import LifecycleEvent
from .pagination import PagedResult, PaginationSettings

__all__ = [
    "LifecyclePhase",
    "SortDirection",
    "LifecycleEvent",
    "PagedResult",
    "PaginationSettings",
]
