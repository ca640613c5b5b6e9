"""Repository for stored files and their field associations."""

from collections.abc import Sequence
from typing import Any, cast
from uuid import UUID

from sqlalchemy import case, delete, func, select
from sqlalchemy.engine import CursorResult

from src.oroya.models import FieldFile, FileRecord
from src.oroya.repositories.base import BaseRepository


class FileRepository(BaseRepository[FileRecord]):
    """Repository for files and the field_files join table."""

    model = FileRecord

    async def list_all(self) -> list[FileRecord]:
        result = await self.session.execute(
            select(FileRecord).order_by(FileRecord.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def get_by_ids(self, ids: Sequence[UUID]) -> list[FileRecord]:
        if not ids:
            return []
        result = await self.session.execute(
            select(FileRecord).where(FileRecord.id.in_(ids))  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def create_field_file(
        self, id: UUID, field_id: UUID, record_id: str, file_id: UUID
    ) -> FieldFile:
        """Associate a file with a (field, record) pair."""
        link = FieldFile(id=id, field_id=field_id, record_id=record_id, file_id=file_id)
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def list_by_field_and_record(self, field_id: UUID, record_id: str) -> list[FileRecord]:
        """Files attached to one record value of a field, oldest first."""
        result = await self.session.execute(
            select(FileRecord)
            .join(FieldFile, FieldFile.file_id == FileRecord.id)
            .where(FieldFile.field_id == field_id, FieldFile.record_id == record_id)
            .order_by(FileRecord.created_at.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_field_file(self, field_id: UUID, record_id: str, file_id: UUID) -> bool:
        result = await self.session.execute(
            delete(FieldFile).where(
                FieldFile.field_id == field_id,
                FieldFile.record_id == record_id,
                FieldFile.file_id == file_id,
            )
        )
        return (cast(CursorResult[Any], result).rowcount or 0) > 0

    async def list_orphans(self) -> list[FileRecord]:
        """Files with no field association."""
        result = await self.session.execute(
            select(FileRecord)
            .outerjoin(FieldFile, FieldFile.file_id == FileRecord.id)
            .where(FieldFile.id.is_(None))  # type: ignore[union-attr]
            .order_by(FileRecord.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def storage_stats(self) -> dict[str, int]:
        """Aggregate counts and sizes over all stored files."""
        totals = (
            await self.session.execute(
                select(
                    func.count(FileRecord.id),
                    func.coalesce(func.sum(FileRecord.size), 0),
                    func.coalesce(func.sum(case((FileRecord.is_image, 1), else_=0)), 0),
                )
            )
        ).one()
        orphan_count = await self.session.scalar(
            select(func.count(FileRecord.id))
            .outerjoin(FieldFile, FieldFile.file_id == FileRecord.id)
            .where(FieldFile.id.is_(None))  # type: ignore[union-attr]
        )
        total_files, total_size, images_count = (int(v) for v in totals)
        return {
            "total_files": total_files,
            "total_size": total_size,
            "images_count": images_count,
            "documents_count": total_files - images_count,
            "orphan_files_count": int(orphan_count or 0),
        }
