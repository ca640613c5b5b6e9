"""Entity relationship model - a typed edge between two entities."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Column, String, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.oroya.models.base import new_id, utc_now
from src.oroya.models.enums import RelationshipType


class EntityRelationship(SQLModel, table=True):
    """Edge between two entities, optionally anchored to specific fields."""

    __tablename__ = "entity_relationships"
    __table_args__ = (
        UniqueConstraint(
            "source_entity_id",
            "target_entity_id",
            "source_field_id",
            "target_field_id",
            name="uq_entity_relationships_edge",
        ),
    )

    id: UUID = Field(default_factory=new_id, primary_key=True)
    source_entity_id: UUID = Field(foreign_key="entities.id", ondelete="CASCADE", index=True)
    target_entity_id: UUID = Field(foreign_key="entities.id", ondelete="CASCADE", index=True)
    relationship_type: RelationshipType = Field(sa_column=Column(String(20), nullable=False))
    source_field_id: UUID | None = Field(
        default=None, foreign_key="fields.id", ondelete="SET NULL"
    )
    target_field_id: UUID | None = Field(
        default=None, foreign_key="fields.id", ondelete="SET NULL"
    )
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=300)
    is_required: bool = Field(default=False)
    cascade_delete: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
