"""Concrete SQLAlchemy repository implementations.

Exports the generic SqlRepository and the get_repository() factory for
wiring at the application boundary (dependency injection).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from repokit.domain.services.lifecycle import Observers
from repokit.infrastructure.persistence.profile import EntityProfile

from .generic import SqlRepository


def get_repository(
    session: AsyncSession,
    profile: EntityProfile[Any, Any] | type,
    observers: Observers | None = None,
) -> SqlRepository[Any, Any]:
    """Construct a repository bound to the given session.

    Intended for use as a dependency:

        async def handler(session: AsyncSession = Depends(get_session)) -> ...:
            customers = get_repository(session, CustomerProfile())
            page = await customers.select_paged(settings)
    """
    return SqlRepository(session, profile, observers)


__all__ = [
    "SqlRepository",
    "get_repository",
]
