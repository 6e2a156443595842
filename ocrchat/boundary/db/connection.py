"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, FastAPI dependency
for session injection, and table creation at startup.

Dependencies: sqlalchemy, ocrchat.configs
System role: Database connection lifecycle management
"""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ocrchat.boundary.db.base import Base
from ocrchat.configs import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the process-wide async engine.

    SQLite URLs skip pool sizing (aiosqlite uses a static/null pool);
    PostgreSQL gets pool_pre_ping to drop stale connections early.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    db_config = get_settings().database

    if db_config.is_sqlite:
        return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql)

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory with explicit transaction control.

    expire_on_commit=False keeps ORM rows readable after the services
    commit mid-pipeline.

    Returns:
        async_sessionmaker: Session factory bound to the engine
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    Yields:
        AsyncSession: Session closed when the request finishes
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all tables registered on Base.metadata (idempotent).

    Args:
        engine: Engine to use; defaults to the configured engine
    """
    # Register models on the metadata before create_all
    from ocrchat.boundary.db import models  # noqa: F401

    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine() -> None:
    """Dispose the cached engine and clear factory caches (shutdown hook)."""
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
    get_async_session_factory.cache_clear()
    get_async_engine.cache_clear()
