"""Async SQLAlchemy engine, session factory, and session dependency.

Sessions are created with autoflush disabled; the repository switches
change tracking on only around update() commits.
"""

from collections.abc import AsyncGenerator

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///:memory:"
    database_echo: bool = False


settings = Settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for mapped entities."""


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a session; repositories commit their own work."""
    async with AsyncSessionLocal() as session:
        yield session
