"""Unit tests for ProvisioningService."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.applypath.core.exceptions import Conflict
from src.applypath.models import ProfileRole
from src.applypath.schemas.identity import IdentityCreated
from src.applypath.services.provisioning_service import ProvisioningService

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    return session


@pytest.fixture
def service(mock_session) -> ProvisioningService:
    service = ProvisioningService(mock_session)
    service.profile_repo = MagicMock()
    service.profile_repo.exists = AsyncMock(return_value=False)
    return service


@pytest.fixture
def event() -> IdentityCreated:
    return IdentityCreated(id=uuid4(), email="new.hire@example.com", display_name=None)


class TestProvision:
    async def test_creates_consultant_profile(self, service, mock_session, event):
        profile = await service.provision(event)

        assert profile.id == event.id
        assert profile.name == "new.hire"
        assert profile.email == event.email
        assert profile.role == ProfileRole.CONSULTANT.value
        service.profile_repo.add.assert_called_once_with(profile)
        mock_session.flush.assert_awaited_once()

    async def test_never_commits(self, service, mock_session, event):
        await service.provision(event)

        mock_session.commit.assert_not_called()

    async def test_existing_profile_conflicts(self, service, mock_session, event):
        service.profile_repo.exists.return_value = True

        with pytest.raises(Conflict):
            await service.provision(event)

        service.profile_repo.add.assert_not_called()
        mock_session.flush.assert_not_called()

    async def test_integrity_error_becomes_conflict(self, service, mock_session, event):
        mock_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with pytest.raises(Conflict) as exc_info:
            await service.provision(event)

        assert isinstance(exc_info.value.__cause__, IntegrityError)

    async def test_long_display_name_is_truncated(self, service, event):
        long_event = IdentityCreated(id=event.id, email=event.email, display_name="x" * 150)

        profile = await service.provision(long_event)

        assert len(profile.name) == 100
