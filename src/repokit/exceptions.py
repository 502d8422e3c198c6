"""
Exceptions raised by the repository layer.

Store failures are not wrapped: StoreError is SQLAlchemy's own base error,
so callers catch the same exception the driver raised.
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError

StoreError = SQLAlchemyError


class RepositoryError(Exception):
    """Base class for errors raised by the repository layer itself."""


class InvalidSortPath(RepositoryError):
    """Raised when an order column does not resolve to a mapped column."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid sort path {path!r}: {reason}")


class InvalidIncludePath(RepositoryError):
    """Raised when an eager-load path does not resolve to a relationship chain."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid include path {path!r}: {reason}")


class InvalidPaginationSettings(RepositoryError):
    """Raised for a non-positive page size or a page number below 1."""


class EntityNotFound(RepositoryError):
    """Raised when removing by key and no entity has that key."""

    def __init__(self, entity_type: type, key: Any):
        self.entity_type = entity_type
        self.key = key
        super().__init__(f"{entity_type.__name__} with key {key!r} not found")


class ObserverError(RepositoryError):
    """Raised when a lifecycle observer fails.

    The original exception is available as __cause__. Phases that already
    committed before the failing observer ran are not rolled back.
    """

    def __init__(self, phase: str, observer: Any):
        self.phase = phase
        self.observer = observer
        name = getattr(observer, "__qualname__", repr(observer))
        super().__init__(f"Observer {name} failed during {phase}")
