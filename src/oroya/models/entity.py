"""Entity model - a table-like schema owned by a project."""

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from src.oroya.models.base import new_id, utc_now


class Entity(SQLModel, table=True):
    """Entity owned by a project. Deleted together with its project."""

    __tablename__ = "entities"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=30)
    description: str | None = Field(default=None, max_length=300)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
