"""Identity registry - records identities and emits identity-created events."""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.applypath.core.exceptions import Conflict
from src.applypath.core.logging import get_logger
from src.applypath.core.validators import validate_payload
from src.applypath.models import Identity
from src.applypath.repositories import IdentityRepository
from src.applypath.schemas.identity import IdentityCreate, IdentityCreated
from src.applypath.services.base import unit_of_work
from src.applypath.services.provisioning_service import ProvisioningService

logger = get_logger(__name__)

IdentityHook = Callable[[IdentityCreated], Awaitable[Any]]


class IdentityService:
    """Registers identities; every hook runs in the same transaction."""

    def __init__(self, session: AsyncSession, hooks: Sequence[IdentityHook] | None = None):
        self.session = session
        self.identity_repo = IdentityRepository(session)
        if hooks is None:
            hooks = [ProvisioningService(session).provision]
        self.hooks = list(hooks)

    async def register(
        self,
        data: IdentityCreate | Mapping[str, Any],
        identity_id: UUID | None = None,
    ) -> Identity:
        """Create an identity and run the identity-created hooks atomically.

        Args:
            data: Email and optional display name.
            identity_id: Subject ID issued by the authentication provider.
                         Generated when omitted.

        Raises:
            ValidationError: Malformed payload.
            Conflict: Email or ID already registered, or a hook hit a duplicate.
        """
        payload = validate_payload(IdentityCreate, data)
        # Normalize email to lowercase to prevent case-sensitivity issues
        email = payload.email.lower().strip()

        if await self.identity_repo.get_by_email(email) is not None:
            raise Conflict("Email already registered")

        identity = Identity(email=email, display_name=payload.display_name)
        if identity_id is not None:
            identity.id = identity_id

        async with unit_of_work(self.session, "Identity already registered"):
            self.identity_repo.add(identity)
            await self.session.flush()
            event = IdentityCreated(
                id=identity.id,
                email=identity.email,
                display_name=identity.display_name,
            )
            for hook in self.hooks:
                await hook(event)

        logger.info("Identity registered", identity_id=str(identity.id))
        return identity
