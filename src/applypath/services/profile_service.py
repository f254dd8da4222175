"""Profile reads and self-service profile changes."""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.exceptions import Conflict, NotFound, PermissionDenied
from src.applypath.core.logging import bind_actor_context, clear_actor_context, get_logger
from src.applypath.core.policy import Actor, Operation, ResourceKind, authorize
from src.applypath.core.validators import validate_payload
from src.applypath.models import Profile, ProfileRole
from src.applypath.repositories import IdentityRepository, ProfileRepository
from src.applypath.schemas.profile import ProfileCreate, ProfileUpdate
from src.applypath.services.base import unit_of_work

logger = get_logger(__name__)


class ProfileService:
    """Profile management service."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.profile_repo = ProfileRepository(session)
        self.identity_repo = IdentityRepository(session)

    async def resolve_actor(self, identity_id: UUID) -> Actor:
        """Resolve a verified identity to the actor used for policy checks.

        Replaces any actor bound to the log context with the resolved one.

        Raises:
            PermissionDenied: The identity has no profile.
        """
        clear_actor_context()
        profile = await self.profile_repo.get_by_id(identity_id)
        if profile is None:
            raise PermissionDenied("No profile for this identity")
        bind_actor_context(profile.id, profile.role, profile.email)
        return Actor.from_profile(profile)

    async def get(self, actor: Actor, profile_id: UUID) -> Profile:
        """Get a profile by ID. Profiles are readable by every actor."""
        authorize(actor, Operation.READ, ResourceKind.PROFILE)
        profile = await self.profile_repo.get_by_id(profile_id)
        if profile is None:
            raise NotFound(f"Profile {profile_id} not found")
        return profile

    async def list_profiles(self, actor: Actor) -> list[Profile]:
        authorize(actor, Operation.READ, ResourceKind.PROFILE)
        return await self.profile_repo.list_all()

    async def create(
        self,
        actor: Actor,
        data: ProfileCreate | Mapping[str, Any],
        profile_id: UUID | None = None,
    ) -> Profile:
        """Self-service profile creation for an identity that has none yet.

        The role is always consultant regardless of the actor passed in.
        """
        payload = validate_payload(ProfileCreate, data)
        profile = Profile(
            id=profile_id or actor.id,
            name=payload.name,
            email=payload.email,
            role=ProfileRole.CONSULTANT.value,
        )
        authorize(actor, Operation.CREATE, ResourceKind.PROFILE, profile)

        if await self.identity_repo.get_by_id(profile.id) is None:
            raise NotFound(f"Identity {profile.id} not found")
        if await self.profile_repo.exists(profile.id):
            raise Conflict(f"Profile {profile.id} already exists")

        async with unit_of_work(self.session, f"Profile {profile.id} already exists"):
            self.profile_repo.add(profile)
            await self.session.flush()

        logger.info("Profile created", profile_id=str(profile.id))
        return profile

    async def update(
        self,
        actor: Actor,
        profile_id: UUID,
        data: ProfileUpdate | Mapping[str, Any],
    ) -> Profile:
        """Update name/email of the caller's own profile."""
        payload = validate_payload(ProfileUpdate, data)
        profile = await self.profile_repo.get_by_id(profile_id)
        if profile is None:
            raise NotFound(f"Profile {profile_id} not found")
        authorize(actor, Operation.UPDATE, ResourceKind.PROFILE, profile)

        async with unit_of_work(self.session, "Profile update conflicts with existing data"):
            profile = await self.profile_repo.get_by_id(profile_id, for_update=True)
            if profile is None:
                raise NotFound(f"Profile {profile_id} not found")
            for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(profile, field, value)
            await self.session.flush()

        logger.info("Profile updated", profile_id=str(profile.id))
        return profile
