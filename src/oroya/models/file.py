"""Uploaded file metadata and its (field, record) associations."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Index, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.oroya.models.base import new_id, utc_now


class FileRecord(SQLModel, table=True):
    """Stored file. Paths are relative to the storage directory."""

    __tablename__ = "files"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    original_name: str = Field(max_length=255)
    filename: str = Field(max_length=255, unique=True)
    mimetype: str = Field(max_length=127)
    size: int
    path: str
    is_image: bool = Field(default=False)
    width: int | None = Field(default=None)
    height: int | None = Field(default=None)
    compressed_path: str | None = Field(default=None)
    thumbnail_path: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class FieldFile(SQLModel, table=True):
    """Associates a file with a record value of a file-typed field."""

    __tablename__ = "field_files"
    __table_args__ = (
        Index("ix_field_files_field_record", "field_id", "record_id"),
        UniqueConstraint("field_id", "record_id", "file_id", name="uq_field_files_link"),
    )

    id: UUID = Field(default_factory=new_id, primary_key=True)
    field_id: UUID = Field(foreign_key="fields.id", ondelete="CASCADE")
    record_id: str = Field(max_length=100)
    file_id: UUID = Field(foreign_key="files.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utc_now)
