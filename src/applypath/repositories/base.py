"""Base repository with common CRUD operations."""

from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.applypath.schemas.pagination import decode_cursor, encode_cursor

ModelType = TypeVar("ModelType", bound=SQLModel)


def _parse_cursor_value(cursor_str: str) -> int | datetime | UUID | str:
    """Recover the typed cursor value from its string form."""
    for parse in (int, datetime.fromisoformat, UUID):
        try:
            return parse(cursor_str)
        except ValueError:
            continue
    return cursor_str


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: Any, for_update: bool = False) -> ModelType | None:
        """Get a record by its primary key.

        Args:
            id: Primary key value.
            for_update: Take a row lock for the rest of the transaction and
                        reload the row if the session already holds it.
                        Call this only inside a unit of work.
        """
        query = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion and flush."""
        await self.session.delete(entity)
        await self.session.flush()

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute cursor-based pagination on a query.

        Args:
            query: The base SQLAlchemy query to paginate
            cursor: Optional cursor from previous page (base64-encoded)
            limit: Maximum number of items to return
            cursor_field: The field to use for cursor (e.g., id, created_at)
                         Supports int, datetime, UUID, and other scalar types.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if cursor:
            try:
                cursor_value = _parse_cursor_value(decode_cursor(cursor))
                query = query.where(cursor_field < cursor_value)
            except (ValueError, TypeError):
                # Invalid cursor - ignore and start from beginning
                pass

        # Newest first
        query = query.order_by(cursor_field.desc())

        # Fetch limit + 1 to determine if there are more results
        query = query.limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            value = getattr(items[-1], cursor_field.key)
            if isinstance(value, datetime):
                next_cursor = encode_cursor(value.isoformat())
            elif value is not None:
                next_cursor = encode_cursor(str(value))

        return items, next_cursor, has_more
