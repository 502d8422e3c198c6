"""Generic async repository over SQLAlchemy with dotted-path paging and lifecycle hooks."""

from repokit.domain.models import (
    LifecycleEvent,
    LifecyclePhase,
    PagedResult,
    PaginationSettings,
    SortDirection,
)
from repokit.domain.services import Observers
from repokit.exceptions import (
    EntityNotFound,
    InvalidIncludePath,
    InvalidPaginationSettings,
    InvalidSortPath,
    ObserverError,
    RepositoryError,
    StoreError,
)
from repokit.infrastructure.persistence import (
    EntityProfile,
    Projection,
    Query,
    SqlRepository,
    TransactionalService,
    columns,
    get_repository,
    resolve_sort,
)

__version__ = "0.1.0"

__all__ = [
    "EntityNotFound",
    "EntityProfile",
    "InvalidIncludePath",
    "InvalidPaginationSettings",
    "InvalidSortPath",
    "LifecycleEvent",
    "LifecyclePhase",
    "ObserverError",
    "Observers",
    "PagedResult",
    "PaginationSettings",
    "Projection",
    "Query",
    "RepositoryError",
    "SortDirection",
    "SqlRepository",
    "StoreError",
    "TransactionalService",
    "columns",
    "get_repository",
    "resolve_sort",
]
