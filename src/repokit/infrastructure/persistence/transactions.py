"""Scoped transactions spanning several repository calls."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager

from sqlalchemy.ext.asyncio import AsyncSession

from .store import SessionStore


class TransactionalService:
    """Base for services that must commit several repository calls atomically.

        async with service.begin_transaction():
            await customers.add(customer)
            await orders.add(order)

    Repositories sharing the session flush instead of committing while the
    scope is open; the scope commits once on exit, or rolls back on error.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._store = SessionStore(session)

    def begin_transaction(self) -> AbstractAsyncContextManager[SessionStore]:
        return self._store.begin_transaction()
