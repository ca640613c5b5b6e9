"""Field management service."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.oroya.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.oroya.core.logging import get_logger
from src.oroya.core.validators import (
    DUPLICATE_FIELD_MESSAGE,
    RESERVED_FIELD_MESSAGE,
    is_reserved_field_name,
)
from src.oroya.models import Entity, EntityField
from src.oroya.models.base import new_id
from src.oroya.repositories import EntityRepository, FieldRepository
from src.oroya.schemas.field import FieldCreate, FieldUpdate
from src.oroya.services.common import commit_or_conflict

logger = get_logger(__name__)


class FieldService:
    """Fields belong to an entity.

    Checks run in a fixed order before any write: parent existence,
    duplicate name, reserved word, then foreign-key references.
    """

    def __init__(
        self,
        field_repo: FieldRepository,
        entity_repo: EntityRepository,
        session: AsyncSession,
    ):
        self.field_repo = field_repo
        self.entity_repo = entity_repo
        self.session = session

    async def _get_entity(self, entity_id: UUID, project_id: UUID | None = None) -> Entity:
        entity = await self.entity_repo.get_by_id(entity_id)
        if entity is None or (project_id is not None and entity.project_id != project_id):
            raise NotFoundError.for_resource("Entity", entity_id)
        return entity

    async def list_fields(self, entity_id: UUID, project_id: UUID | None = None) -> list[EntityField]:
        await self._get_entity(entity_id, project_id)
        return await self.field_repo.list_by_entity(entity_id)

    async def get_field(
        self,
        field_id: UUID,
        entity_id: UUID | None = None,
        project_id: UUID | None = None,
    ) -> EntityField:
        """Get a field, optionally scoped to an entity (and its project)."""
        if entity_id is not None:
            await self._get_entity(entity_id, project_id)
        field = await self.field_repo.get_by_id(field_id)
        if field is None or (entity_id is not None and field.entity_id != entity_id):
            raise NotFoundError.for_resource("Field", field_id)
        return field

    async def _check_name(self, entity_id: UUID, name: str, exclude_id: UUID | None = None) -> None:
        if await self.field_repo.name_taken_in_entity(entity_id, name, exclude_id=exclude_id):
            raise ConflictError(DUPLICATE_FIELD_MESSAGE)
        if is_reserved_field_name(name):
            raise ValidationError(RESERVED_FIELD_MESSAGE)

    async def _check_foreign_key(
        self, foreign_entity_id: UUID | None, foreign_field_id: UUID | None
    ) -> None:
        if foreign_entity_id is None or foreign_field_id is None:
            raise ValidationError("Foreign key fields require foreignEntityId and foreignFieldId")
        if not await self.entity_repo.exists(foreign_entity_id):
            raise NotFoundError(f"Referenced entity {foreign_entity_id} not found")
        if not await self.field_repo.exists(foreign_field_id):
            raise NotFoundError(f"Referenced field {foreign_field_id} not found")
        if not await self.field_repo.belongs_to_entity(foreign_field_id, foreign_entity_id):
            raise ValidationError("Referenced field does not belong to the referenced entity")

    async def create_field(
        self,
        entity_id: UUID,
        data: FieldCreate,
        project_id: UUID | None = None,
    ) -> EntityField:
        await self._get_entity(entity_id, project_id)
        await self._check_name(entity_id, data.name)
        if data.is_foreign_key:
            await self._check_foreign_key(data.foreign_entity_id, data.foreign_field_id)

        field = await self.field_repo.create(
            new_id(), {"entity_id": entity_id, **data.model_dump()}
        )
        await commit_or_conflict(self.session, DUPLICATE_FIELD_MESSAGE)
        logger.info(
            "field_created",
            field_id=str(field.id),
            entity_id=str(entity_id),
            name=field.name,
            type=field.type,
        )
        return field

    async def update_field(
        self,
        field_id: UUID,
        data: FieldUpdate,
        entity_id: UUID | None = None,
        project_id: UUID | None = None,
    ) -> EntityField:
        field = await self.get_field(field_id, entity_id, project_id)
        patch: dict[str, Any] = data.to_patch()

        if "name" in patch:
            await self._check_name(field.entity_id, patch["name"], exclude_id=field_id)

        is_foreign_key = patch.get("is_foreign_key", field.is_foreign_key)
        if is_foreign_key:
            foreign_entity_id = patch.get("foreign_entity_id", field.foreign_entity_id)
            foreign_field_id = patch.get("foreign_field_id", field.foreign_field_id)
            if foreign_field_id == field_id:
                raise ValidationError("A field cannot reference itself")
            await self._check_foreign_key(foreign_entity_id, foreign_field_id)
        elif field.is_foreign_key or "foreign_entity_id" in patch or "foreign_field_id" in patch:
            patch["foreign_entity_id"] = None
            patch["foreign_field_id"] = None

        updated = await self.field_repo.update(field_id, patch)
        if updated is None:
            raise NotFoundError.for_resource("Field", field_id)
        await commit_or_conflict(self.session, DUPLICATE_FIELD_MESSAGE)
        logger.info("field_updated", field_id=str(field_id), fields=sorted(patch))
        return updated

    async def delete_field(
        self,
        field_id: UUID,
        entity_id: UUID | None = None,
        project_id: UUID | None = None,
    ) -> None:
        """Delete a field. Fields referencing it stop being foreign keys."""
        await self.get_field(field_id, entity_id, project_id)
        cleared = await self.field_repo.clear_references(field_id=field_id)
        if not await self.field_repo.delete(field_id):
            raise NotFoundError.for_resource("Field", field_id)
        await self.session.commit()
        logger.info("field_deleted", field_id=str(field_id), cleared_references=cleared)
