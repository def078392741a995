"""
Database Session Management

Async SQLAlchemy engine and session factory for the product store.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from unitrade.config import Settings, get_settings
from unitrade.models.orm.base import Base  # noqa: F401 - imported for Alembic

# Created lazily, disposed on shutdown
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """
    Get or create the async SQLAlchemy engine.

    Args:
        settings: Optional settings override (for testing)
    """
    global _engine

    if _engine is None:
        if settings is None:
            settings = get_settings()

        _engine = create_async_engine(
            settings.database_url,
            echo=settings.debug,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
        )

    return _engine


def get_session_factory(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    """Get or create the async session factory."""
    global _async_session_factory

    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(settings),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    return _async_session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a session per request.

    Commits when the handler returns, rolls back if it raises.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def init_db() -> None:
    """Verify the database is reachable. Called on application startup."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(lambda _: None)


async def close_db() -> None:
    """Dispose of pooled connections. Called on application shutdown."""
    global _engine, _async_session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_factory = None


def reset_db_state() -> None:
    """Drop the cached engine and session factory (for testing)."""
    global _engine, _async_session_factory
    _engine = None
    _async_session_factory = None
