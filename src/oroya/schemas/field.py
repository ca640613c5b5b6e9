"""Field schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from src.oroya.core.validators import (
    DESCRIPTION_MAX,
    field_name_error,
    split_extensions,
    validate_allowed_extensions,
    validate_max_file_size,
)
from src.oroya.models.enums import FieldType
from src.oroya.schemas.base import CamelModel, PatchModel, strip_optional


def _check_field_name(v: str) -> str:
    error = field_name_error(v)
    if error:
        raise ValueError(error)
    return v


def _check_max_file_size(v: int | None) -> int | None:
    if v is not None:
        error = validate_max_file_size(v)
        if error:
            raise ValueError(error)
    return v


def _check_extensions(v: str | None) -> str | None:
    v = strip_optional(v)
    if v is not None:
        error = validate_allowed_extensions(v)
        if error:
            raise ValueError(error)
        v = ",".join(ext.lower() for ext in split_extensions(v))
    return v


class FieldCreate(CamelModel):
    """Schema for creating a field."""

    name: str
    type: FieldType
    required: bool = False
    is_unique: bool = False
    default_value: str | None = None
    max_length: int | None = Field(default=None, gt=0)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX)
    accepts_multiple: bool = False
    max_file_size: int | None = None
    allowed_extensions: str | None = None
    is_primary_key: bool = False
    is_foreign_key: bool = False
    foreign_entity_id: UUID | None = None
    foreign_field_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_field_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("max_file_size")
    @classmethod
    def validate_max_file_size(cls, v: int | None) -> int | None:
        return _check_max_file_size(v)

    @field_validator("allowed_extensions")
    @classmethod
    def validate_allowed_extensions(cls, v: str | None) -> str | None:
        return _check_extensions(v)

    @model_validator(mode="after")
    def validate_foreign_key(self) -> "FieldCreate":
        if self.is_foreign_key:
            if self.foreign_entity_id is None or self.foreign_field_id is None:
                raise ValueError("Foreign key fields require foreignEntityId and foreignFieldId")
        else:
            self.foreign_entity_id = None
            self.foreign_field_id = None
        return self


class FieldUpdate(PatchModel):
    """Schema for updating a field.

    Foreign-key consistency depends on the stored record, so it is
    checked in the service once the patch is merged.
    """

    name: str | None = None
    type: FieldType | None = None
    required: bool | None = None
    is_unique: bool | None = None
    default_value: str | None = None
    max_length: int | None = Field(default=None, gt=0)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX)
    accepts_multiple: bool | None = None
    max_file_size: int | None = None
    allowed_extensions: str | None = None
    is_primary_key: bool | None = None
    is_foreign_key: bool | None = None
    foreign_entity_id: UUID | None = None
    foreign_field_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Field name cannot be null")
        return _check_field_name(v)

    @field_validator(
        "type", "required", "is_unique", "accepts_multiple", "is_primary_key", "is_foreign_key"
    )
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("Value cannot be null")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("max_file_size")
    @classmethod
    def validate_max_file_size(cls, v: int | None) -> int | None:
        return _check_max_file_size(v)

    @field_validator("allowed_extensions")
    @classmethod
    def validate_allowed_extensions(cls, v: str | None) -> str | None:
        return _check_extensions(v)


class FieldRead(CamelModel):
    """Schema for reading a field."""

    id: UUID
    entity_id: UUID
    name: str
    type: FieldType
    required: bool
    is_unique: bool
    default_value: str | None
    max_length: int | None
    description: str | None
    accepts_multiple: bool
    max_file_size: int | None
    allowed_extensions: str | None
    is_primary_key: bool
    is_foreign_key: bool
    foreign_entity_id: UUID | None
    foreign_field_id: UUID | None
    created_at: datetime
    updated_at: datetime
