"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, seeded workspace/user rows, mock sessions
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from workbench.boundary.db import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
async def workspace(test_async_db):
    """Persisted workspace."""
    from workbench.boundary.db.CRUD import workspace_crud

    return await workspace_crud.create(test_async_db, name="Acme")


@pytest.fixture
async def user(test_async_db):
    """Persisted user with a username."""
    from workbench.boundary.db.CRUD import user_crud

    return await user_crud.create(
        test_async_db,
        email="ada@acme.test",
        username="ada",
        first_name="Ada",
        last_name="Lovelace",
        image_url="https://img.acme.test/ada.png",
    )


@pytest.fixture
async def workspace_member(test_async_db, workspace, user):
    """User with an active membership in the workspace."""
    from workbench.boundary.db.base import utcnow
    from workbench.boundary.db.CRUD import membership_crud

    await membership_crud.create(
        test_async_db,
        user_id=user.id,
        workspace_id=workspace.id,
        role="user",
        start_at=utcnow() - timedelta(days=1),
        end_at=None,
    )
    return user
