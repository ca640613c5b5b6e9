"""Entity relationship schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.oroya.core.validators import DESCRIPTION_MAX
from src.oroya.models.enums import RelationshipType
from src.oroya.schemas.base import CamelModel, PatchModel, strip_optional


class RelationshipCreate(CamelModel):
    """Schema for creating a relationship between two entities."""

    source_entity_id: UUID
    target_entity_id: UUID
    relationship_type: RelationshipType
    source_field_id: UUID | None = None
    target_field_id: UUID | None = None
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX)
    is_required: bool = False
    cascade_delete: bool = False

    @field_validator("name", "description")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class RelationshipUpdate(PatchModel):
    """Schema for updating a relationship. Endpoints are immutable."""

    relationship_type: RelationshipType | None = None
    source_field_id: UUID | None = None
    target_field_id: UUID | None = None
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX)
    is_required: bool | None = None
    cascade_delete: bool | None = None

    @field_validator("relationship_type", "is_required", "cascade_delete")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("Value cannot be null")
        return v

    @field_validator("name", "description")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class RelationshipRead(CamelModel):
    """Schema for reading a relationship."""

    id: UUID
    source_entity_id: UUID
    target_entity_id: UUID
    relationship_type: RelationshipType
    source_field_id: UUID | None
    target_field_id: UUID | None
    name: str | None
    description: str | None
    is_required: bool
    cascade_delete: bool
    created_at: datetime
    updated_at: datetime


class RelationshipDetail(RelationshipRead):
    """Relationship with the names of both entities and anchor fields."""

    source_entity_name: str | None = None
    target_entity_name: str | None = None
    source_field_name: str | None = None
    target_field_name: str | None = None


class RelationshipExists(CamelModel):
    exists: bool
