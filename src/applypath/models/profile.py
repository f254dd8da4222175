"""Profile model - one per identity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.applypath.models.base import utc_now
from src.applypath.models.enums import ProfileRole, check_in


class Profile(SQLModel, table=True):
    """User profile keyed by the identity ID.

    Created by the provisioning rule when an identity registers.
    """

    __tablename__ = "profiles"
    __table_args__ = (CheckConstraint(check_in("role", ProfileRole), name="ck_profiles_role"),)

    id: UUID = Field(foreign_key="identities.id", primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=255, index=True)
    role: str = Field(default=ProfileRole.CONSULTANT.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def role_enum(self) -> ProfileRole:
        """Get role as ProfileRole enum."""
        return ProfileRole(self.role)
