"""Identity registry payloads."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


class IdentityCreate(BaseModel):
    email: EmailStr
    display_name: str | None = Field(default=None, max_length=100)

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class IdentityCreated(BaseModel):
    """Event emitted once an identity row exists."""

    id: UUID
    email: str
    display_name: str | None = None

    model_config = {"frozen": True}

    @property
    def profile_name(self) -> str:
        """Display name if supplied, otherwise the email's local part."""
        if self.display_name and self.display_name.strip():
            return self.display_name.strip()
        return self.email.split("@", 1)[0]
