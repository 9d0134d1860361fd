"""Async engine, session factory and declarative Base (PostgreSQL via asyncpg).

The schema is owned by Alembic migrations. The engine is built lazily by
_ensure_engine() so importing models or routes never loads Settings.
"""

import logging
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from humanika.core.config import get_settings

logger = logging.getLogger(__name__)

engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Declarative base for all HUMANIKA tables."""


def _ensure_engine() -> async_sessionmaker[AsyncSession]:
    """Return the session factory, creating the engine on first call."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is None:
        settings = get_settings()
        engine = create_async_engine(
            settings.database_url,
            echo=settings.database_echo,
            pool_pre_ping=True,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
            connect_args={"command_timeout": settings.db_command_timeout},
        )
        AsyncSessionLocal = async_sessionmaker(
            bind=engine, expire_on_commit=False, autoflush=False
        )
        logger.info("Database engine created (pool_size=%d)", settings.db_pool_size)
    return AsyncSessionLocal


async def dispose_engine() -> None:
    """Close pooled connections; safe to call when no engine exists."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """Read session dependency. Never commits."""
    async with _ensure_engine()() as session:
        yield session


async def get_db_transactional() -> AsyncIterator[AsyncSession]:
    """Write session dependency: one transaction per request.

    Commits when the route returns, rolls back when it raises. Workflow
    operations nest a savepoint inside it (see SqlAlchemyUnitOfWork).
    """
    async with _ensure_engine()() as session:
        async with session.begin():
            yield session
