"""Generic repository base interface.

Repository[T, K] is the root abstraction for data access over one entity
type T keyed by K.  The concrete implementation lives in
repokit/infrastructure/persistence/ and is wired at the application boundary
via dependency injection.

Design notes:
  - All methods that touch the store are async; query()/query_by() only
    compose a lazy query and never hit the store themselves.
  - Predicates are SQLAlchemy boolean expressions; projections are column
    selections applied by the store, not in Python.
  - select_paged*() order by a dotted attribute path given at runtime and
    report the total match count alongside the page.
  - add/update/remove notify the repository's lifecycle observers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from repokit.domain.models.pagination import PagedResult, PaginationSettings

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

T = TypeVar("T")
K = TypeVar("K")


class Repository(ABC, Generic[T, K]):
    """Abstract CRUD, query and paging interface for one entity type."""

    @abstractmethod
    async def find(self, key: K) -> T | None:
        """Return the entity with the given key, or None if not found."""

    @abstractmethod
    async def find_with_include(self, key: K, *includes: Any) -> T | None:
        """Return the entity with the given key with the named relationships loaded."""

    @abstractmethod
    async def all(self) -> list[T]:
        """Return every entity in scope, detached from change tracking."""

    @abstractmethod
    async def all_with_include(self, *includes: Any) -> list[T]:
        """Like all(), with the named relationships eagerly loaded."""

    @abstractmethod
    async def add(self, entity: T) -> T:
        """Persist a new entity and return it (with any DB-generated fields populated)."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Persist changes to an existing entity and return the persisted instance."""

    @abstractmethod
    async def remove(self, key: K) -> bool:
        """Remove the entity with the given key.  Raises EntityNotFound if absent."""

    @abstractmethod
    async def remove_entity(self, entity: T) -> bool:
        """Remove an entity the caller already holds, skipping the key lookup."""

    @abstractmethod
    def query(self, predicate: ColumnElement[bool] | None = None) -> Any:
        """Compose a lazy query over the entities in scope.  Never touches the store."""

    @abstractmethod
    def query_projection(self, projection: Any) -> Any:
        """Compose a lazy projected query over the entities in scope."""

    @abstractmethod
    def query_by(self, predicate: ColumnElement[bool] | None, projection: Any) -> Any:
        """Compose a lazy projected query over the entities matching predicate."""

    @abstractmethod
    async def select_by(self, predicate: ColumnElement[bool], projection: Any = None) -> list[Any]:
        """Return all entities (or projected rows) matching predicate."""

    @abstractmethod
    async def select(self, projection: Any) -> list[Any]:
        """Return projected rows for every entity in scope."""

    @abstractmethod
    async def select_paged(
        self, settings: PaginationSettings, projection: Any = None
    ) -> PagedResult[Any]:
        """Return one ordered page of entities (or projected rows)."""

    @abstractmethod
    async def select_paged_by(
        self,
        settings: PaginationSettings,
        predicate: ColumnElement[bool] | None,
        projection: Any = None,
    ) -> PagedResult[Any]:
        """Return one ordered page of entities (or projected rows) matching predicate."""
