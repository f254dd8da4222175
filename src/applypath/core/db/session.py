"""Database session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from src.applypath.core.db.engine import get_engine


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None) -> AsyncGenerator[AsyncSession]:
    """Create a database session.

    Args:
        engine: Optional engine override for testing.

    Yields:
        AsyncSession. Services own commit/rollback; the session is closed on exit.
    """
    if engine is None:
        engine = get_engine()

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session


async def create_all(engine: AsyncEngine | None = None) -> None:
    """Create all tables from model metadata.

    Bootstrap for tests and local development only; there is no migration tooling.
    """
    # Register every table on SQLModel.metadata
    import src.applypath.models  # noqa: F401

    if engine is None:
        engine = get_engine()

    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
