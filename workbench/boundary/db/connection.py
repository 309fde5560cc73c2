"""
Database engines and sessions.

The API process shares one pooled engine, cached on first use. Celery
tasks run each job under its own event loop, so they build a throwaway
NullPool engine per run with create_task_engine().

Dependencies: sqlalchemy, workbench.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from workbench.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Pooled asyncpg engine for the API process.

    Connections are pinged before checkout so a restarted database does
    not surface as request errors.
    """
    db_config = get_settings().database
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory() -> async_sessionmaker:
    """Session factory bound to the shared engine; no autoflush, no expiry on commit."""
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request-scoped session.

    Commits when the route completes without error, rolls back otherwise.

    Usage:
        @router.get("/workspaces/{workspace_id}/groups")
        async def list_groups(workspace_id: UUID, db: AsyncSession = Depends(get_async_db)):
            ...
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def create_task_engine() -> AsyncEngine:
    """
    Unpooled engine for a single worker task run.

    The caller disposes it once the run's event loop is done.
    """
    db_config = get_settings().database
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        poolclass=NullPool,
    )
