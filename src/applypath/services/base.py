"""Transaction boundary shared by the write services."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.exceptions import Conflict


@asynccontextmanager
async def unit_of_work(session: AsyncSession, conflict_detail: str) -> AsyncGenerator[None]:
    """Commit on success; roll back and surface the error otherwise.

    Unique/foreign key violations at flush or commit become Conflict.
    Nothing is retried.
    """
    try:
        yield
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise Conflict(conflict_detail) from e
    except Exception:
        await session.rollback()
        raise
