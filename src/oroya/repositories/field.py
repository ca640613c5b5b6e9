"""Repository for entity fields."""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import func, literal, update
from sqlalchemy.engine import CursorResult
from sqlmodel import select

from src.oroya.models import Entity, EntityField
from src.oroya.models.base import utc_now
from src.oroya.repositories.base import BaseRepository


class FieldRepository(BaseRepository[EntityField]):
    """Repository for fields, scoped by entity where relevant."""

    model = EntityField

    async def list_all(self) -> list[EntityField]:
        result = await self.session.execute(
            select(EntityField).order_by(EntityField.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_by_entity(self, entity_id: UUID) -> list[EntityField]:
        """List an entity's fields in creation order."""
        result = await self.session.execute(
            select(EntityField)
            .where(EntityField.entity_id == entity_id)
            .order_by(EntityField.created_at.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def belongs_to_entity(self, field_id: UUID, entity_id: UUID) -> bool:
        result = await self.session.execute(
            select(literal(1))
            .where(EntityField.id == field_id, EntityField.entity_id == entity_id)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def name_taken_in_entity(
        self, entity_id: UUID, name: str, exclude_id: UUID | None = None
    ) -> bool:
        """Check for a case-insensitive name clash among an entity's fields."""
        query = select(literal(1)).where(
            EntityField.entity_id == entity_id,
            func.lower(EntityField.name) == name.lower(),
        )
        if exclude_id is not None:
            query = query.where(EntityField.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_names_in_entity(self, entity_id: UUID) -> list[str]:
        result = await self.session.execute(
            select(EntityField.name).where(EntityField.entity_id == entity_id)
        )
        return list(result.scalars().all())

    async def clear_references(
        self,
        *,
        field_id: UUID | None = None,
        entity_id: UUID | None = None,
        project_id: UUID | None = None,
    ) -> int:
        """Turn fields referencing a field, an entity or any entity of a project
        back into plain fields.

        Must run before the target is deleted. Returns the number of fields changed.
        """
        if field_id is not None:
            condition = EntityField.foreign_field_id == field_id
        elif entity_id is not None:
            condition = EntityField.foreign_entity_id == entity_id
        elif project_id is not None:
            condition = EntityField.foreign_entity_id.in_(  # type: ignore[union-attr]
                select(Entity.id).where(Entity.project_id == project_id)
            )
        else:
            raise ValueError("clear_references needs a field, entity or project id")
        result = await self.session.execute(
            update(EntityField)
            .where(condition)
            .values(
                is_foreign_key=False,
                foreign_entity_id=None,
                foreign_field_id=None,
                updated_at=utc_now(),
            )
        )
        return cast(CursorResult[Any], result).rowcount or 0
