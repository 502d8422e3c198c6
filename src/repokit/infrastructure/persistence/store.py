"""Data-store collaborator over an AsyncSession.

SessionStore is the only place the repository layer talks to SQLAlchemy's
session.  It does not serialize access: one session (and so one store)
belongs to one unit of work at a time.

Change tracking maps onto the session's autoflush flag.  Sessions from
repokit.infrastructure.database start with it off; change_tracking()
turns it on for the duration of a block and always turns it off again.
The flag only governs flushing before queries run inside the block.
commit() flushes pending changes either way, so wrapping a bare commit
in the scope marks the update boundary rather than changing what is
written.

begin_transaction() opens an ambient transaction shared through
session.info: while one is open, commit() only flushes, and the outermost
scope commits (or rolls back) everything at once.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

_TRANSACTION_DEPTH = "repokit.transaction_depth"


class SessionStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    # --- reads ---

    async def find(self, entity_type: type, key: Any) -> Any | None:
        return await self._session.get(entity_type, key)

    async def scalars(self, stmt: Select) -> list[Any]:
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def rows(self, stmt: Select) -> list[Any]:
        result = await self._session.execute(stmt)
        return list(result.all())

    async def count(self, stmt: Select) -> int:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        return (await self._session.scalar(count_stmt)) or 0

    def detach(self, entities: list[Any]) -> None:
        for entity in entities:
            self._session.expunge(entity)

    # --- writes ---

    def add(self, entity: Any) -> None:
        self._session.add(entity)

    async def mark_modified(self, entity: Any) -> Any:
        """Attach entity (persistent or detached) and return the tracked instance."""
        return await self._session.merge(entity)

    async def mark_removed(self, entity: Any) -> None:
        await self._session.delete(entity)

    async def commit(self) -> None:
        if self._transaction_depth:
            await self._session.flush()
        else:
            await self._session.commit()

    # --- scopes ---

    def set_change_tracking(self, enabled: bool) -> None:
        self._session.sync_session.autoflush = enabled

    @asynccontextmanager
    async def change_tracking(self) -> AsyncIterator[SessionStore]:
        self.set_change_tracking(True)
        try:
            yield self
        finally:
            self.set_change_tracking(False)

    @property
    def _transaction_depth(self) -> int:
        return self._session.info.get(_TRANSACTION_DEPTH, 0)

    @asynccontextmanager
    async def begin_transaction(self) -> AsyncIterator[SessionStore]:
        """Group several repository calls into one commit.

        Nested scopes join the outermost one.  Any exception leaving the
        outermost scope rolls the session back and is re-raised.
        """
        depth = self._transaction_depth
        self._session.info[_TRANSACTION_DEPTH] = depth + 1
        try:
            yield self
            if depth == 0:
                await self._session.commit()
        except BaseException:
            if depth == 0:
                logger.debug("Rolling back transaction scope")
                await self._session.rollback()
            raise
        finally:
            self._session.info[_TRANSACTION_DEPTH] = depth
