"""Repository layer - data access abstraction."""

from src.applypath.repositories.base import BaseRepository
from src.applypath.repositories.identity import IdentityRepository
from src.applypath.repositories.profile import ProfileRepository
from src.applypath.repositories.project import ActivityRepository, ProjectRepository

__all__ = [
    "ActivityRepository",
    "BaseRepository",
    "IdentityRepository",
    "ProfileRepository",
    "ProjectRepository",
]
