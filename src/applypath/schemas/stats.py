from pydantic import BaseModel, Field


class ProjectStats(BaseModel):
    """Status counts over the projects visible to one reader."""

    total: int = Field(default=0, ge=0)
    active: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    urgent: int = Field(default=0, ge=0)
