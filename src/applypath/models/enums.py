"""Shared enums for models."""

from enum import Enum


class ProfileRole(str, Enum):
    """Organization role of a profile."""

    MANAGER = "manager"
    CONSULTANT = "consultant"


class ProjectStatus(str, Enum):
    """Project workflow status."""

    PENDING = "pending"
    ACTIVE = "active"
    URGENT = "urgent"
    COMPLETED = "completed"


def check_in(column: str, enum: type[Enum]) -> str:
    """Build a CHECK constraint body restricting a column to an enum's values."""
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"
