"""SQLAlchemy implementation of Repository[T, K] for any mapped entity.

Paged queries run a fixed pipeline:

    select(entity)
      -> profile fixed conditions        (always)
      -> user predicate                  (absent means match all)
      -> profile search condition        (only when settings.search is set)
      -> COUNT of the filtered set       (total_records)
      -> ORDER BY settings.order_column  (resolved before the store is touched)
      -> projection                      (optional)
      -> OFFSET skip, LIMIT page_size

Mutations notify the repository's own Observers:

    add:    before_persist -> store.add           -> commit -> after_persist
    update: before_save    -> store.mark_modified -> commit -> after_save
    remove: find -> before_remove -> store.mark_removed -> commit -> after_remove

A failing observer or commit stops the pipeline where it is; nothing
already committed is undone.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from repokit.domain.models.pagination import PagedResult, PaginationSettings
from repokit.domain.repositories.base import Repository
from repokit.domain.services.lifecycle import Observers
from repokit.exceptions import EntityNotFound, InvalidPaginationSettings
from repokit.infrastructure.persistence.loading import include_options
from repokit.infrastructure.persistence.ordering import resolve_sort
from repokit.infrastructure.persistence.profile import EntityProfile
from repokit.infrastructure.persistence.query import Query, as_projection
from repokit.infrastructure.persistence.store import SessionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")


class SqlRepository(Repository[T, K]):
    def __init__(
        self,
        session: AsyncSession,
        profile: EntityProfile[T, K] | type[T],
        observers: Observers | None = None,
    ) -> None:
        self._store = SessionStore(session)
        self.profile = profile if isinstance(profile, EntityProfile) else EntityProfile(profile)
        self.observers = observers if observers is not None else Observers()

    @property
    def entity(self) -> type[T]:
        return self.profile.entity

    @property
    def store(self) -> SessionStore:
        return self._store

    def _scoped(self) -> Query[T]:
        return Query(self._store, self.entity).where(*self.profile.fixed_conditions())

    # --- reads ---

    async def find(self, key: K) -> T | None:
        return await self._store.find(self.entity, key)

    async def find_with_include(self, key: K, *includes: Any) -> T | None:
        query = Query(self._store, self.entity).where(self.profile.key_condition(key))
        query = query.options(*include_options(self.entity, *(includes or self.profile.includes)))
        return await query.first()

    async def all(self) -> list[T]:
        entities = await self._scoped().to_list()
        self._store.detach(entities)
        return entities

    async def all_with_include(self, *includes: Any) -> list[T]:
        options = include_options(self.entity, *(includes or self.profile.includes))
        entities = await self._scoped().options(*options).to_list()
        self._store.detach(entities)
        return entities

    def query(self, predicate: ColumnElement[bool] | None = None) -> Query[T]:
        """Lazy query over the scoped set; an absent predicate matches everything."""
        return self._scoped().where(predicate)

    def query_projection(self, projection: Any) -> Query[Any]:
        return self._scoped().select(projection)

    def query_by(self, predicate: ColumnElement[bool] | None, projection: Any) -> Query[Any]:
        return self._scoped().where(predicate).select(projection)

    async def select_by(self, predicate: ColumnElement[bool], projection: Any = None) -> list[Any]:
        query = self._scoped().where(predicate)
        if projection is not None:
            query = query.select(projection)
        return await query.to_list()

    async def select(self, projection: Any) -> list[Any]:
        return await self.query_projection(projection).to_list()

    async def select_paged(
        self, settings: PaginationSettings, projection: Any = None
    ) -> PagedResult[Any]:
        return await self._paged(settings, None, projection)

    async def select_paged_by(
        self,
        settings: PaginationSettings,
        predicate: ColumnElement[bool] | None,
        projection: Any = None,
    ) -> PagedResult[Any]:
        return await self._paged(settings, predicate, projection)

    async def _paged(
        self,
        settings: PaginationSettings,
        predicate: ColumnElement[bool] | None,
        projection: Any,
    ) -> PagedResult[Any]:
        # Resolve everything that can fail before the first round trip.
        if settings.page_size <= 0 or settings.page < 1:
            raise InvalidPaginationSettings(
                f"cannot page with page={settings.page}, page_size={settings.page_size}"
            )
        sort = resolve_sort(self.entity, settings.order_column, settings.order_direction)
        projection = as_projection(projection)

        query = self._scoped().where(predicate, self.profile.search_condition(settings.search))
        total = await query.count()

        page = query.sorted(sort)
        if projection is not None:
            page = page.select(projection)
        data = await page.offset(settings.skip).limit(settings.page_size).to_list()

        logger.debug(
            "Paged %s by %s %s: page %d, %d of %d record(s)",
            self.entity.__name__,
            settings.order_column,
            settings.order_direction.value,
            settings.page,
            len(data),
            total,
        )
        return PagedResult(
            page=settings.page,
            total_records=total,
            page_size=settings.page_size,
            data=data,
        )

    # --- mutations ---

    async def add(self, entity: T) -> T:
        await self.observers.before_persist.fire(entity)
        self._store.add(entity)
        await self._store.commit()
        await self.observers.after_persist.fire(entity)
        return entity

    async def update(self, entity: T) -> T:
        await self.observers.before_save.fire(entity)
        persisted = await self._store.mark_modified(entity)
        async with self._store.change_tracking():
            await self._store.commit()
        await self.observers.after_save.fire(persisted)
        return persisted

    async def remove(self, key: K) -> bool:
        entity = await self.find(key)
        if entity is None:
            raise EntityNotFound(self.entity, key)
        return await self.remove_entity(entity)

    async def remove_entity(self, entity: T) -> bool:
        await self.observers.before_remove.fire(entity)
        await self._store.mark_removed(entity)
        await self._store.commit()
        await self.observers.after_remove.fire(entity)
        return True
