"""Project and activity payloads."""

from datetime import date, datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from src.applypath.models.enums import ProjectStatus

# Fields that may be omitted from an update but never cleared.
REQUIRED_PROJECT_FIELDS = ("client_name", "client_email", "start_date", "deadline", "status")


def _clean_tags(values: list[str]) -> list[str]:
    """Strip, drop blanks and deduplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        value = value.strip()
        if value:
            seen.setdefault(value, None)
    return list(seen)


def _blank_to_none(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    client_name: str = Field(min_length=1, max_length=200)
    client_email: EmailStr
    client_phone: str | None = Field(default=None, max_length=50)
    start_date: date
    deadline: date
    status: ProjectStatus = ProjectStatus.PENDING
    assigned_to: UUID | None = None
    application_season: str | None = Field(default=None, max_length=100)
    notes: str | None = None
    project_types: list[str] = Field(default_factory=list)
    target_universities: list[str] = Field(default_factory=list)

    @field_validator("client_name")
    @classmethod
    def validate_client_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Client name cannot be empty or whitespace only")
        return v

    @field_validator("client_phone", "application_season", "notes")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("project_types", "target_universities")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Only fields that are set get written."""

    client_name: str | None = Field(default=None, min_length=1, max_length=200)
    client_email: EmailStr | None = None
    client_phone: str | None = Field(default=None, max_length=50)
    start_date: date | None = None
    deadline: date | None = None
    status: ProjectStatus | None = None
    assigned_to: UUID | None = None
    application_season: str | None = Field(default=None, max_length=100)
    notes: str | None = None
    project_types: list[str] | None = None
    target_universities: list[str] | None = None

    @field_validator("client_name")
    @classmethod
    def validate_client_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Client name cannot be empty or whitespace only")
        return v

    @field_validator("client_phone", "application_season", "notes")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("project_types", "target_universities")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str]:
        # Clearing a tag set means an empty set, not NULL
        return _clean_tags(v or [])

    @model_validator(mode="after")
    def validate_required_not_cleared(self) -> Self:
        cleared = [
            name
            for name in REQUIRED_PROJECT_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if cleared:
            raise ValueError(f"Required fields cannot be cleared: {', '.join(cleared)}")
        return self


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: int
    client_name: str
    client_email: str
    client_phone: str | None
    start_date: date
    deadline: date
    status: ProjectStatus
    assigned_to: UUID | None
    application_season: str | None
    notes: str | None
    project_types: list[str]
    target_universities: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ActivityCreate(BaseModel):
    description: str = Field(min_length=1, max_length=2000)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Activity description cannot be empty or whitespace only")
        return v
