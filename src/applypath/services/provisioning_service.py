"""Provisioning rule - one profile per newly created identity."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.exceptions import Conflict
from src.applypath.core.logging import get_logger
from src.applypath.models import Profile, ProfileRole
from src.applypath.repositories import ProfileRepository
from src.applypath.schemas.identity import IdentityCreated

logger = get_logger(__name__)


class ProvisioningService:
    """Creates the profile for an identity inside the registering transaction.

    `provision` flushes but never commits: the identity registry owns the
    transaction, so a failure here rolls the identity back too.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.profile_repo = ProfileRepository(session)

    async def provision(self, event: IdentityCreated) -> Profile:
        """Handle an identity-created event.

        Raises:
            Conflict: A profile already exists for this identity. Not retried.
        """
        if await self.profile_repo.exists(event.id):
            logger.error("Profile already provisioned", identity_id=str(event.id))
            raise Conflict(f"Profile for identity {event.id} already exists")

        # Elevation to manager is an administrative action, never part of signup
        profile = Profile(
            id=event.id,
            name=event.profile_name[:100],
            email=event.email,
            role=ProfileRole.CONSULTANT.value,
        )
        self.profile_repo.add(profile)

        try:
            await self.session.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent provisioning of the same identity
            logger.error("Profile provisioning conflict", identity_id=str(event.id))
            raise Conflict(f"Profile for identity {event.id} already exists") from e

        logger.info("Profile provisioned", profile_id=str(profile.id), role=profile.role)
        return profile
