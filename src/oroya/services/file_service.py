"""File upload, retrieval and association service."""

import base64
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.oroya.core.config import Settings
from src.oroya.core.exceptions import NotFoundError, UploadError
from src.oroya.core.logging import get_logger
from src.oroya.models import FieldFile, FileRecord, FileVariant
from src.oroya.models.base import new_id
from src.oroya.repositories import FieldRepository, FileRepository
from src.oroya.schemas.file import Base64Upload
from src.oroya.services.common import commit_or_conflict
from src.oroya.services.file_storage import (
    FileStorage,
    StoredFile,
    decode_base64,
    variant_path,
)

logger = get_logger(__name__)


@dataclass
class IncomingFile:
    """An upload read into memory."""

    content: bytes
    filename: str
    mimetype: str


@dataclass
class FileContent:
    record: FileRecord
    content: bytes
    media_type: str


class FileService:
    """Coordinates file storage on disk with file metadata rows."""

    def __init__(
        self,
        file_repo: FileRepository,
        field_repo: FieldRepository,
        storage: FileStorage,
        session: AsyncSession,
        settings: Settings,
    ):
        self.file_repo = file_repo
        self.field_repo = field_repo
        self.storage = storage
        self.session = session
        self.settings = settings

    async def list_files(self) -> list[FileRecord]:
        return await self.file_repo.list_all()

    async def get_file(self, file_id: UUID) -> FileRecord:
        record = await self.file_repo.get_by_id(file_id)
        if record is None:
            raise NotFoundError.for_resource("File", file_id)
        return record

    def check_batch(self, count: int, images_only: bool = False) -> int:
        """Check the number of files in a batch and return the per-file size limit."""
        if images_only:
            max_files = self.settings.max_image_upload_files
            max_size = self.settings.max_image_upload_size
        else:
            max_files = self.settings.max_upload_files
            max_size = self.settings.max_upload_size

        if count == 0:
            raise UploadError("No files were received")
        if count > max_files:
            raise UploadError(f"Too many files. At most {max_files} per upload")
        return max_size

    async def upload_files(
        self, files: list[IncomingFile], images_only: bool = False
    ) -> list[FileRecord]:
        """Store a batch of uploads. The batch is all-or-nothing."""
        max_size = self.check_batch(len(files), images_only)

        stored: list[StoredFile] = []
        try:
            for incoming in files:
                stored.append(
                    await self.storage.save(
                        incoming.content,
                        incoming.filename,
                        incoming.mimetype,
                        max_size=max_size,
                        images_only=images_only,
                    )
                )
            records = [await self.file_repo.create(s.id, s.record_data()) for s in stored]
            await commit_or_conflict(self.session, "File could not be saved")
        except Exception:
            for s in stored:
                await self.storage.delete(*s.paths())
            raise

        logger.info("files_uploaded", count=len(records), images_only=images_only)
        return records

    async def upload_base64(self, body: Base64Upload) -> FileRecord:
        """Store a base64 payload, attaching it to a field record when both ids are given."""
        content = decode_base64(body.base64_data)
        attach = body.field_id is not None and body.record_id is not None
        if attach and not await self.field_repo.exists(body.field_id):  # type: ignore[arg-type]
            raise NotFoundError.for_resource("Field", body.field_id)

        stored = await self.storage.save(
            content,
            body.original_name,
            body.mimetype,
            max_size=self.settings.max_upload_size,
        )
        try:
            record = await self.file_repo.create(stored.id, stored.record_data())
            if attach:
                await self.file_repo.create_field_file(
                    new_id(), body.field_id, body.record_id, record.id  # type: ignore[arg-type]
                )
            await commit_or_conflict(self.session, "File could not be saved")
        except Exception:
            await self.storage.delete(*stored.paths())
            raise
        return record

    async def read_file(
        self, file_id: UUID, variant: FileVariant = FileVariant.ORIGINAL
    ) -> FileContent:
        record = await self.get_file(file_id)
        path, is_jpeg = variant_path(
            record.path, record.compressed_path, record.thumbnail_path, variant
        )
        content = await self.storage.read(path)
        return FileContent(
            record=record,
            content=content,
            media_type="image/jpeg" if is_jpeg else record.mimetype,
        )

    async def read_base64(
        self, file_id: UUID, variant: FileVariant = FileVariant.ORIGINAL
    ) -> dict[str, Any]:
        file = await self.read_file(file_id, variant)
        return {
            "base64": base64.b64encode(file.content).decode("ascii"),
            "mimetype": file.media_type,
            "original_name": file.record.original_name,
            "size": len(file.content),
        }

    async def rename_file(self, file_id: UUID, original_name: str) -> FileRecord:
        record = await self.file_repo.update(file_id, {"original_name": original_name})
        if record is None:
            raise NotFoundError.for_resource("File", file_id)
        await self.session.commit()
        return record

    async def delete_file(self, file_id: UUID) -> None:
        """Delete the row (and its associations), then the stored variants."""
        record = await self.get_file(file_id)
        paths = [record.path, record.thumbnail_path, record.compressed_path]
        await self.file_repo.delete(file_id)
        await self.session.commit()
        await self.storage.delete(*paths)
        logger.info("file_deleted", file_id=str(file_id))

    async def list_for_record(self, field_id: UUID, record_id: str) -> list[FileRecord]:
        return await self.file_repo.list_by_field_and_record(field_id, record_id)

    async def attach(self, field_id: UUID, record_id: str, file_id: UUID) -> FieldFile:
        if not await self.field_repo.exists(field_id):
            raise NotFoundError.for_resource("Field", field_id)
        if not await self.file_repo.exists(file_id):
            raise NotFoundError.for_resource("File", file_id)
        link = await self.file_repo.create_field_file(new_id(), field_id, record_id, file_id)
        await commit_or_conflict(self.session, "File is already attached to this record")
        return link

    async def detach(self, field_id: UUID, record_id: str, file_id: UUID) -> None:
        if not await self.file_repo.delete_field_file(field_id, record_id, file_id):
            raise NotFoundError("File is not attached to this record")
        await self.session.commit()

    async def list_orphans(self) -> list[FileRecord]:
        return await self.file_repo.list_orphans()

    async def storage_stats(self) -> dict[str, int]:
        return await self.file_repo.storage_stats()
