"""Project and Activity models."""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import JSON, CheckConstraint, Column
from sqlmodel import Field, SQLModel

from src.applypath.models.base import utc_now
from src.applypath.models.enums import ProjectStatus, check_in


class Project(SQLModel, table=True):
    """Unit of client work.

    `assigned_to` is a weak reference: deleting the profile nulls it.
    `updated_at` is maintained by the write path (see core.hooks), never by callers.
    """

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(check_in("status", ProjectStatus), name="ck_projects_status"),
        # Ids are never reused after a delete
        {"sqlite_autoincrement": True},
    )

    id: int | None = Field(default=None, primary_key=True)
    client_name: str = Field(max_length=200)
    client_email: str = Field(max_length=255)
    client_phone: str | None = Field(default=None, max_length=50)
    start_date: date
    deadline: date
    status: str = Field(default=ProjectStatus.PENDING.value, max_length=20, index=True)
    assigned_to: UUID | None = Field(
        default=None, foreign_key="profiles.id", ondelete="SET NULL", index=True
    )
    application_season: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None)
    project_types: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    target_universities: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Activity(SQLModel, table=True):
    """Append-only log entry; removed only by its project's cascade."""

    __tablename__ = "activities"
    __table_args__ = ({"sqlite_autoincrement": True},)

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    description: str = Field(max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)
