from pydantic import BaseModel, EmailStr, Field


class ProfileCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class ProfileUpdate(BaseModel):
    """Self-service profile changes. Role is not editable here."""

    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
