"""Identity and profile factories for test data generation."""

from polyfactory import Use

from src.applypath.models import Identity, Profile, ProfileRole
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class IdentityFactory(BaseFactory):
    """Factory for generating Identity test data."""

    __model__ = Identity

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    display_name = "Test User"
    created_at = Use(utc_now)


class ProfileFactory(BaseFactory):
    """Factory for generating Profile test data.

    `id` must be set to an existing identity's ID.
    """

    __model__ = Profile

    id = None
    name = "Test Consultant"
    email = Use(lambda: f"profile_{generate_uuid().hex[-8:]}@example.com")
    role = ProfileRole.CONSULTANT.value
    created_at = Use(utc_now)

    @classmethod
    def manager(cls, **kwargs):
        """Create a manager profile."""
        return cls.build(
            role=ProfileRole.MANAGER.value,
            name=kwargs.pop("name", "Test Manager"),
            **kwargs,
        )
