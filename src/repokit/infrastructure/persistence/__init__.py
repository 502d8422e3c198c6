"""Persistence package.

Exports the store, the lazy query, the per-entity profile, the sort
resolver and the generic repository with its DI factory.
"""

from repokit.infrastructure.persistence.loading import include_options
from repokit.infrastructure.persistence.ordering import SortOrder, clear_sort_cache, resolve_sort
from repokit.infrastructure.persistence.profile import EntityProfile
from repokit.infrastructure.persistence.query import Projection, Query, columns
from repokit.infrastructure.persistence.repositories import SqlRepository, get_repository
from repokit.infrastructure.persistence.store import SessionStore
from repokit.infrastructure.persistence.transactions import TransactionalService

__all__ = [
    "EntityProfile",
    "Projection",
    "Query",
    "SessionStore",
    "SortOrder",
    "SqlRepository",
    "TransactionalService",
    "clear_sort_cache",
    "columns",
    "get_repository",
    "include_options",
    "resolve_sort",
]
