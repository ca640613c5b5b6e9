"""Field model - a typed column definition owned by an entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Column, String
from sqlmodel import Field, SQLModel

from src.oroya.models.base import new_id, utc_now
from src.oroya.models.enums import FieldType


class EntityField(SQLModel, table=True):
    """Field definition.

    Foreign-key fields point at another entity and one of its fields;
    those references are nulled when the target is deleted.
    """

    __tablename__ = "fields"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    entity_id: UUID = Field(foreign_key="entities.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=20)
    type: FieldType = Field(sa_column=Column(String(20), nullable=False))
    required: bool = Field(default=False)
    is_unique: bool = Field(default=False)
    default_value: str | None = Field(default=None)
    max_length: int | None = Field(default=None)
    description: str | None = Field(default=None, max_length=300)

    # File-typed fields
    accepts_multiple: bool = Field(default=False)
    max_file_size: int | None = Field(default=None)
    allowed_extensions: str | None = Field(default=None)

    # Keys
    is_primary_key: bool = Field(default=False)
    is_foreign_key: bool = Field(default=False)
    foreign_entity_id: UUID | None = Field(
        default=None, foreign_key="entities.id", ondelete="SET NULL"
    )
    foreign_field_id: UUID | None = Field(
        default=None, foreign_key="fields.id", ondelete="SET NULL"
    )

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
