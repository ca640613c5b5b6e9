"""File schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.oroya.schemas.base import CamelModel


class FileRead(CamelModel):
    """Stored file metadata."""

    id: UUID
    original_name: str
    filename: str
    mimetype: str
    size: int
    path: str
    is_image: bool
    width: int | None
    height: int | None
    compressed_path: str | None
    thumbnail_path: str | None
    created_at: datetime
    updated_at: datetime


class FileUploadResponse(CamelModel):
    success: bool = True
    message: str
    files: list[FileRead]


class Base64Upload(CamelModel):
    """Upload body carrying the file as base64 text.

    When both `field_id` and `record_id` are given the new file is
    associated with that record right away.
    """

    base64_data: str = Field(min_length=1)
    original_name: str = Field(min_length=1, max_length=255)
    mimetype: str = Field(min_length=1, max_length=127)
    field_id: UUID | None = None
    record_id: str | None = Field(default=None, max_length=100)

    @field_validator("original_name")
    @classmethod
    def validate_original_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("originalName cannot be empty")
        return v


class Base64UploadResponse(CamelModel):
    success: bool = True
    message: str
    file: FileRead


class FileBase64Response(CamelModel):
    success: bool = True
    base64: str
    mimetype: str
    original_name: str
    size: int


class FileRename(CamelModel):
    original_name: str = Field(min_length=1, max_length=255)

    @field_validator("original_name")
    @classmethod
    def validate_original_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("originalName cannot be empty")
        return v


class FieldFileAttach(CamelModel):
    file_id: UUID


class FieldFileRead(CamelModel):
    id: UUID
    field_id: UUID
    record_id: str
    file_id: UUID
    created_at: datetime


class FieldFilesResponse(CamelModel):
    success: bool = True
    files: list[FileRead]


class StorageStats(CamelModel):
    total_files: int
    total_size: int
    images_count: int
    documents_count: int
    orphan_files_count: int
