"""Repository for Identity entity."""

from sqlmodel import select

from src.applypath.models import Identity
from src.applypath.repositories.base import BaseRepository


class IdentityRepository(BaseRepository[Identity]):
    model = Identity

    async def get_by_email(self, email: str) -> Identity | None:
        """Get identity by email address."""
        result = await self.session.execute(select(Identity).where(Identity.email == email))
        return result.scalar_one_or_none()
