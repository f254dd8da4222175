"""Administrative operations - run by operators, outside the actor policy."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.exceptions import NotFound, ValidationError
from src.applypath.core.logging import get_logger
from src.applypath.models import Profile, ProfileRole
from src.applypath.repositories import ProfileRepository, ProjectRepository
from src.applypath.services.base import unit_of_work

logger = get_logger(__name__)


class AdminService:
    """Role changes and profile removal.

    These are not reachable through the actor-gated services: role
    elevation is never self-service.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.profile_repo = ProfileRepository(session)
        self.project_repo = ProjectRepository(session)

    async def _lock(self, profile_id: UUID) -> Profile:
        profile = await self.profile_repo.get_by_id(profile_id, for_update=True)
        if profile is None:
            raise NotFound(f"Profile {profile_id} not found")
        return profile

    async def set_role(self, profile_id: UUID, role: ProfileRole | str) -> Profile:
        """Change a profile's role."""
        try:
            new_role = ProfileRole(role)
        except ValueError as e:
            raise ValidationError(f"Invalid role: {role}") from e

        if not await self.profile_repo.exists(profile_id):
            raise NotFound(f"Profile {profile_id} not found")

        async with unit_of_work(self.session, "Role change conflicts with existing data"):
            profile = await self._lock(profile_id)
            old_role = profile.role
            profile.role = new_role.value
            await self.session.flush()

        logger.info(
            "Profile role changed",
            profile_id=str(profile_id),
            old_role=old_role,
            new_role=new_role.value,
        )
        return profile

    async def delete_profile(self, profile_id: UUID) -> int:
        """Delete a profile, unassigning its projects first.

        Projects are kept; only their `assigned_to` is cleared.

        Returns:
            Number of projects that were unassigned.
        """
        if not await self.profile_repo.exists(profile_id):
            raise NotFound(f"Profile {profile_id} not found")

        async with unit_of_work(self.session, "Profile is still referenced"):
            profile = await self._lock(profile_id)
            unassigned = await self.project_repo.unassign_profile(profile_id)
            await self.profile_repo.delete(profile)

        logger.info(
            "Profile deleted",
            profile_id=str(profile_id),
            unassigned_projects=unassigned,
        )
        return unassigned
