"""Repository for Profile entity."""

from uuid import UUID

from sqlmodel import select

from src.applypath.models import Profile
from src.applypath.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    model = Profile

    async def exists(self, profile_id: UUID) -> bool:
        """Check if a profile with the given ID exists."""
        return await self.get_by_id(profile_id) is not None

    async def list_all(self) -> list[Profile]:
        """List every profile ordered by name."""
        result = await self.session.execute(select(Profile).order_by(Profile.name, Profile.id))
        return list(result.scalars().all())
