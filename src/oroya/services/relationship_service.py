"""Entity relationship service."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.oroya.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.oroya.core.logging import get_logger
from src.oroya.models import EntityRelationship
from src.oroya.models.base import new_id
from src.oroya.repositories import EntityRepository, FieldRepository, RelationshipRepository
from src.oroya.schemas.relationship import RelationshipCreate, RelationshipUpdate
from src.oroya.services.common import commit_or_conflict

logger = get_logger(__name__)

DUPLICATE_RELATIONSHIP_MESSAGE = "This relationship already exists"


class RelationshipService:
    """Edges between entities, optionally anchored to a field on each end."""

    def __init__(
        self,
        relationship_repo: RelationshipRepository,
        entity_repo: EntityRepository,
        field_repo: FieldRepository,
        session: AsyncSession,
    ):
        self.relationship_repo = relationship_repo
        self.entity_repo = entity_repo
        self.field_repo = field_repo
        self.session = session

    async def list_detailed(self) -> list[dict[str, Any]]:
        return await self.relationship_repo.list_with_entity_details()

    async def list_for_entity(self, entity_id: UUID) -> list[EntityRelationship]:
        if not await self.entity_repo.exists(entity_id):
            raise NotFoundError.for_resource("Entity", entity_id)
        return await self.relationship_repo.list_by_entity(entity_id)

    async def get_relationship(self, relationship_id: UUID) -> EntityRelationship:
        relationship = await self.relationship_repo.get_by_id(relationship_id)
        if relationship is None:
            raise NotFoundError.for_resource("Relationship", relationship_id)
        return relationship

    async def exists_between(
        self,
        source_entity_id: UUID,
        target_entity_id: UUID,
        exclude_id: UUID | None = None,
    ) -> bool:
        return await self.relationship_repo.exists_between_entities(
            source_entity_id, target_entity_id, exclude_id=exclude_id
        )

    async def _check_anchor(self, field_id: UUID, entity_id: UUID, end: str) -> None:
        if not await self.field_repo.exists(field_id):
            raise NotFoundError(f"{end.capitalize()} field {field_id} not found")
        if not await self.field_repo.belongs_to_entity(field_id, entity_id):
            raise ValidationError(f"The {end} field does not belong to the {end} entity")

    async def create_relationship(self, data: RelationshipCreate) -> EntityRelationship:
        if not await self.entity_repo.exists(data.source_entity_id):
            raise NotFoundError(f"Source entity {data.source_entity_id} not found")
        if not await self.entity_repo.exists(data.target_entity_id):
            raise NotFoundError(f"Target entity {data.target_entity_id} not found")
        if data.source_field_id is not None:
            await self._check_anchor(data.source_field_id, data.source_entity_id, "source")
        if data.target_field_id is not None:
            await self._check_anchor(data.target_field_id, data.target_entity_id, "target")
        if await self.relationship_repo.edge_exists(
            data.source_entity_id,
            data.target_entity_id,
            data.source_field_id,
            data.target_field_id,
        ):
            raise ConflictError(DUPLICATE_RELATIONSHIP_MESSAGE)

        relationship = await self.relationship_repo.create(new_id(), data.model_dump())
        await commit_or_conflict(self.session, DUPLICATE_RELATIONSHIP_MESSAGE)
        logger.info(
            "relationship_created",
            relationship_id=str(relationship.id),
            source_entity_id=str(data.source_entity_id),
            target_entity_id=str(data.target_entity_id),
            relationship_type=data.relationship_type,
        )
        return relationship

    async def update_relationship(
        self, relationship_id: UUID, data: RelationshipUpdate
    ) -> EntityRelationship:
        relationship = await self.get_relationship(relationship_id)
        patch = data.to_patch()

        source_field_id = patch.get("source_field_id", relationship.source_field_id)
        target_field_id = patch.get("target_field_id", relationship.target_field_id)
        if patch.get("source_field_id") is not None:
            await self._check_anchor(
                patch["source_field_id"], relationship.source_entity_id, "source"
            )
        if patch.get("target_field_id") is not None:
            await self._check_anchor(
                patch["target_field_id"], relationship.target_entity_id, "target"
            )
        if ("source_field_id" in patch or "target_field_id" in patch) and (
            await self.relationship_repo.edge_exists(
                relationship.source_entity_id,
                relationship.target_entity_id,
                source_field_id,
                target_field_id,
                exclude_id=relationship_id,
            )
        ):
            raise ConflictError(DUPLICATE_RELATIONSHIP_MESSAGE)

        updated = await self.relationship_repo.update(relationship_id, patch)
        if updated is None:
            raise NotFoundError.for_resource("Relationship", relationship_id)
        await commit_or_conflict(self.session, DUPLICATE_RELATIONSHIP_MESSAGE)
        logger.info(
            "relationship_updated", relationship_id=str(relationship_id), fields=sorted(patch)
        )
        return updated

    async def delete_relationship(self, relationship_id: UUID) -> None:
        if not await self.relationship_repo.delete(relationship_id):
            raise NotFoundError.for_resource("Relationship", relationship_id)
        await self.session.commit()
        logger.info("relationship_deleted", relationship_id=str(relationship_id))
