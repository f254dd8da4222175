"""Identity model - the registry's record of a verified caller."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.applypath.models.base import utc_now


class Identity(SQLModel, table=True):
    """Verified identity issued by the authentication provider."""

    __tablename__ = "identities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    display_name: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now)
