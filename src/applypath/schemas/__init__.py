from src.applypath.schemas.identity import IdentityCreate, IdentityCreated
from src.applypath.schemas.pagination import Page
from src.applypath.schemas.profile import ProfileCreate, ProfileUpdate
from src.applypath.schemas.project import (
    ActivityCreate,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from src.applypath.schemas.stats import ProjectStats

__all__ = [
    "ActivityCreate",
    "IdentityCreate",
    "IdentityCreated",
    "Page",
    "ProfileCreate",
    "ProfileUpdate",
    "ProjectCreate",
    "ProjectRead",
    "ProjectStats",
    "ProjectUpdate",
]
