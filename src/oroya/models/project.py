"""Project model - top-level container for entities."""

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from src.oroya.models.base import new_id, utc_now


class Project(SQLModel, table=True):
    """A named schema-design project.

    Names are unique case-insensitively; the check lives in the service
    layer since SQLite unique indexes compare case-sensitively.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    name: str = Field(max_length=50, index=True)
    description: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
