"""Model exports.

Import from here: `from src.applypath.models import Profile, Project`
"""

# Enums
from src.applypath.models.enums import ProfileRole, ProjectStatus

# Tables
from src.applypath.models.identity import Identity
from src.applypath.models.profile import Profile
from src.applypath.models.project import Activity, Project

__all__ = [
    # Enums
    "ProfileRole",
    "ProjectStatus",
    # Tables
    "Activity",
    "Identity",
    "Profile",
    "Project",
]
