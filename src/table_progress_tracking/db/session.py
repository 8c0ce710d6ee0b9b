"""Database session management for the progress store."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from table_progress_tracking.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Module-level state
_engine: AsyncEngine | None = None
_async_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_database_url(settings: Settings) -> str:
    """Get the progress store connection URL.

    Raises:
        ValueError: If DATABASE_URL is not configured.
    """
    if settings.database_url:
        return str(settings.database_url)

    raise ValueError("No database configuration: set DATABASE_URL")


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Get or create async database engine."""
    global _engine

    if _engine is None:
        if settings is None:
            settings = get_settings()

        logger.info("Creating database engine")

        _engine = create_async_engine(
            get_database_url(settings),
            echo=settings.debug,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    return _engine


def get_session_maker(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    """Get or create async session maker."""
    global _async_session_maker

    if _async_session_maker is None:
        _async_session_maker = async_sessionmaker(
            get_engine(settings),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database session.

    Commits when the request handler returns, rolls back if it raises.

    Yields:
        Database session.
    """
    session_maker = get_session_maker()
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Type alias for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def close_db() -> None:
    """Close database connections (call on app shutdown)."""
    global _engine, _async_session_maker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_maker = None
