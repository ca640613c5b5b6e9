"""Entity schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.oroya.core.validators import DESCRIPTION_MAX, entity_name_error
from src.oroya.schemas.base import CamelModel, PatchModel, strip_optional


def _check_entity_name(v: str) -> str:
    error = entity_name_error(v)
    if error:
        raise ValueError(error)
    return v


class EntityCreate(CamelModel):
    """Schema for creating an entity.

    `project_id` is only read on the flat `/entities` route; nested routes
    take the project from the path.
    """

    name: str
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX)
    project_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_entity_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class EntityUpdate(PatchModel):
    """Schema for updating an entity."""

    name: str | None = None
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Entity name cannot be null")
        return _check_entity_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class EntityRead(CamelModel):
    """Schema for reading an entity."""

    id: UUID
    project_id: UUID
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime
