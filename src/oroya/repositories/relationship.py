"""Repository for entity relationships."""

from typing import Any
from uuid import UUID

from sqlalchemy import literal, or_, select
from sqlalchemy.orm import aliased

from src.oroya.models import Entity, EntityField, EntityRelationship
from src.oroya.repositories.base import BaseRepository

Rel = EntityRelationship


class RelationshipRepository(BaseRepository[EntityRelationship]):
    """Repository for edges between entities."""

    model = EntityRelationship

    async def list_all(self) -> list[EntityRelationship]:
        result = await self.session.execute(select(Rel).order_by(Rel.created_at.desc()))  # type: ignore[attr-defined]
        return list(result.scalars().all())

    async def list_by_source(self, entity_id: UUID) -> list[EntityRelationship]:
        result = await self.session.execute(
            select(Rel)
            .where(Rel.source_entity_id == entity_id)
            .order_by(Rel.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_by_target(self, entity_id: UUID) -> list[EntityRelationship]:
        result = await self.session.execute(
            select(Rel)
            .where(Rel.target_entity_id == entity_id)
            .order_by(Rel.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_by_entity(self, entity_id: UUID) -> list[EntityRelationship]:
        """List relationships where the entity is either end."""
        result = await self.session.execute(
            select(Rel)
            .where(or_(Rel.source_entity_id == entity_id, Rel.target_entity_id == entity_id))
            .order_by(Rel.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def exists_between_entities(
        self,
        source_entity_id: UUID,
        target_entity_id: UUID,
        exclude_id: UUID | None = None,
    ) -> bool:
        """Check for an existing edge from source to target, in that direction."""
        query = select(literal(1)).where(
            Rel.source_entity_id == source_entity_id,
            Rel.target_entity_id == target_entity_id,
        )
        if exclude_id is not None:
            query = query.where(Rel.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_with_entity_details(self) -> list[dict[str, Any]]:
        """List relationships with entity and anchor field names, newest first."""
        source_entity = aliased(Entity)
        target_entity = aliased(Entity)
        source_field = aliased(EntityField)
        target_field = aliased(EntityField)

        query = (
            select(
                Rel,
                source_entity.name.label("source_entity_name"),
                target_entity.name.label("target_entity_name"),
                source_field.name.label("source_field_name"),
                target_field.name.label("target_field_name"),
            )
            .outerjoin(source_entity, Rel.source_entity_id == source_entity.id)
            .outerjoin(target_entity, Rel.target_entity_id == target_entity.id)
            .outerjoin(source_field, Rel.source_field_id == source_field.id)
            .outerjoin(target_field, Rel.target_field_id == target_field.id)
            .order_by(Rel.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(query)
        return [
            {
                **relationship.model_dump(),
                "source_entity_name": source_entity_name,
                "target_entity_name": target_entity_name,
                "source_field_name": source_field_name,
                "target_field_name": target_field_name,
            }
            for (
                relationship,
                source_entity_name,
                target_entity_name,
                source_field_name,
                target_field_name,
            ) in result.all()
        ]

    async def edge_exists(
        self,
        source_entity_id: UUID,
        target_entity_id: UUID,
        source_field_id: UUID | None,
        target_field_id: UUID | None,
        exclude_id: UUID | None = None,
    ) -> bool:
        """Check for an identical edge, treating missing anchor fields as equal."""
        query = select(literal(1)).where(
            Rel.source_entity_id == source_entity_id,
            Rel.target_entity_id == target_entity_id,
            Rel.source_field_id.is_not_distinct_from(source_field_id),  # type: ignore[union-attr]
            Rel.target_field_id.is_not_distinct_from(target_field_id),  # type: ignore[union-attr]
        )
        if exclude_id is not None:
            query = query.where(Rel.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None
