"""Base repository with common CRUD operations."""

from collections.abc import Mapping
from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete, literal, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.oroya.models.base import utc_now


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer. Identifiers are supplied by the
    caller, never generated here.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def _id_column(self) -> Any:
        return self.model.id  # type: ignore[attr-defined]

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(select(self.model).where(self._id_column == id))
        return result.scalar_one_or_none()

    async def exists(self, id: UUID) -> bool:
        """Check whether a record with this id exists."""
        result = await self.session.execute(
            select(literal(1)).select_from(self.model).where(self._id_column == id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def create(self, id: UUID, data: Mapping[str, Any]) -> ModelType:
        """Insert a record and return it as stored, with server-side defaults."""
        entity = self.model(id=id, **data)
        self.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, id: UUID, patch: Mapping[str, Any]) -> ModelType | None:
        """Apply a partial update.

        Only keys present in `patch` are written. An empty patch is a plain
        re-fetch. Returns None when no row has this id.
        """
        if not patch:
            return await self.get_by_id(id)

        values = dict(patch)
        if "updated_at" in self.model.model_fields:
            values["updated_at"] = utc_now()

        result = await self.session.execute(
            update(self.model).where(self._id_column == id).values(**values)
        )
        if cast(CursorResult[Any], result).rowcount == 0:
            return None
        return await self._refetch(id)

    async def delete(self, id: UUID) -> bool:
        """Delete a record by id. Returns False when nothing was deleted."""
        result = await self.session.execute(delete(self.model).where(self._id_column == id))
        return (cast(CursorResult[Any], result).rowcount or 0) > 0

    async def _refetch(self, id: UUID) -> ModelType | None:
        result = await self.session.execute(
            select(self.model)
            .where(self._id_column == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
