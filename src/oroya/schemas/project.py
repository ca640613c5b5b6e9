"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.oroya.core.validators import PROJECT_DESCRIPTION_MAX, project_name_error
from src.oroya.schemas.base import CamelModel, PatchModel, strip_optional


def _check_project_name(v: str) -> str:
    error = project_name_error(v)
    if error:
        raise ValueError(error)
    return v


class ProjectCreate(CamelModel):
    """Schema for creating or fully replacing a project."""

    name: str
    description: str | None = Field(default=None, max_length=PROJECT_DESCRIPTION_MAX)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_project_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class ProjectUpdate(PatchModel):
    """Schema for partially updating a project."""

    name: str | None = None
    description: str | None = Field(default=None, max_length=PROJECT_DESCRIPTION_MAX)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Project name cannot be null")
        return _check_project_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class ProjectRead(CamelModel):
    """Schema for reading a project."""

    id: UUID
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime
