"""Integration test fixtures for database operations.

Each test gets a fresh in-memory SQLite database with foreign keys enabled.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from src.applypath.core.db import build_engine, create_all, get_session
from src.applypath.core.policy import Actor
from src.applypath.models import ProfileRole
from src.applypath.repositories.base import BaseRepository
from tests.helpers import create_actor


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a private in-memory database with all tables."""
    # StaticPool keeps the single in-memory connection alive across sessions
    test_engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_all(test_engine)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    Services commit on their own; direct inserts in tests must commit explicitly.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def manager_actor(db_session: AsyncSession) -> Actor:
    """Persisted manager profile."""
    return await create_actor(db_session, ProfileRole.MANAGER, name="Morgan Manager")


@pytest.fixture
async def consultant_actor(db_session: AsyncSession) -> Actor:
    """Persisted consultant profile."""
    return await create_actor(db_session, ProfileRole.CONSULTANT, name="Casey Consultant")


@pytest.fixture
async def other_consultant_actor(db_session: AsyncSession) -> Actor:
    """A second consultant with no assignments."""
    return await create_actor(db_session, ProfileRole.CONSULTANT, name="Dana Consultant")


@pytest.fixture
def row_locks(monkeypatch: pytest.MonkeyPatch) -> list[type]:
    """Record the model of every row-locking read a service makes."""
    locks: list[type] = []
    original = BaseRepository.get_by_id

    async def recording_get_by_id(self, id, for_update=False):
        if for_update:
            locks.append(self.model)
        return await original(self, id, for_update=for_update)

    monkeypatch.setattr(BaseRepository, "get_by_id", recording_get_by_id)
    return locks
