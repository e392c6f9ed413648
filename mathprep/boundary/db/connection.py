"""
Database connection management.

Provides SQLAlchemy engines, session factories, and the FastAPI dependency
for database session injection. Engines are created once per process.

Dependencies: sqlalchemy, mathprep.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import AsyncAdaptedQueuePool, QueuePool

from mathprep.configs import get_settings


@lru_cache
def get_engine() -> Engine:
    """
    Create the sync engine (psycopg) used by table management scripts.

    pool_pre_ping=True verifies connections before use to detect stale
    connections early.

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    db_config = get_settings().database

    return create_engine(
        db_config.database_url,
        echo=db_config.echo_sql,
        poolclass=QueuePool,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_session_factory() -> sessionmaker:
    """Sync session factory with manual transaction control."""
    return sessionmaker(bind=get_engine(), autocommit=False, autoflush=False)


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the async engine (asyncpg) used by the API.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Async session factory bound to the process engine.

    expire_on_commit=False keeps returned rows readable after services commit.
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one async session per request.

    Services commit their own unit of work; anything left uncommitted when
    the request fails is rolled back before the session closes.

    Yields:
        AsyncSession: Async SQLAlchemy session scoped to the request

    Usage:
        @router.get("/questions/{id}")
        async def get_question(id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await question_crud.get_by_id(db, id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def dispose_async_engine() -> None:
    """Close pooled connections; called from the app lifespan on shutdown."""
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
