"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProfileFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.profile import IdentityFactory, ProfileFactory
from tests.factories.project import ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Identity / profile
    "IdentityFactory",
    "ProfileFactory",
    # Project
    "ProjectFactory",
]
