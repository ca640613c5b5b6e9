"""Entity management service."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.oroya.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.oroya.core.logging import get_logger
from src.oroya.core.validators import DUPLICATE_ENTITY_MESSAGE
from src.oroya.models import Entity
from src.oroya.models.base import new_id
from src.oroya.repositories import EntityRepository, FieldRepository, ProjectRepository
from src.oroya.schemas.entity import EntityCreate, EntityUpdate
from src.oroya.services.common import commit_or_conflict

logger = get_logger(__name__)


class EntityService:
    """Entities are owned by a project; names are unique within it."""

    def __init__(
        self,
        entity_repo: EntityRepository,
        project_repo: ProjectRepository,
        field_repo: FieldRepository,
        session: AsyncSession,
    ):
        self.entity_repo = entity_repo
        self.project_repo = project_repo
        self.field_repo = field_repo
        self.session = session

    async def _ensure_project(self, project_id: UUID) -> None:
        if not await self.project_repo.exists(project_id):
            raise NotFoundError.for_resource("Project", project_id)

    async def list_entities(self, project_id: UUID) -> list[Entity]:
        await self._ensure_project(project_id)
        return await self.entity_repo.list_by_project(project_id)

    async def get_entity(self, entity_id: UUID, project_id: UUID | None = None) -> Entity:
        """Get an entity, optionally requiring it to belong to `project_id`."""
        if project_id is not None:
            await self._ensure_project(project_id)
        entity = await self.entity_repo.get_by_id(entity_id)
        if entity is None or (project_id is not None and entity.project_id != project_id):
            raise NotFoundError.for_resource("Entity", entity_id)
        return entity

    async def create_entity(self, data: EntityCreate, project_id: UUID | None = None) -> Entity:
        project_id = project_id or data.project_id
        if project_id is None:
            raise ValidationError("projectId is required")
        await self._ensure_project(project_id)
        if await self.entity_repo.name_taken_in_project(project_id, data.name):
            raise ConflictError(DUPLICATE_ENTITY_MESSAGE)

        entity = await self.entity_repo.create(
            new_id(),
            {"project_id": project_id, "name": data.name, "description": data.description},
        )
        await commit_or_conflict(self.session, DUPLICATE_ENTITY_MESSAGE)
        logger.info(
            "entity_created",
            entity_id=str(entity.id),
            project_id=str(project_id),
            name=entity.name,
        )
        return entity

    async def update_entity(
        self, entity_id: UUID, data: EntityUpdate, project_id: UUID | None = None
    ) -> Entity:
        entity = await self.get_entity(entity_id, project_id)
        patch = data.to_patch()
        if "name" in patch and await self.entity_repo.name_taken_in_project(
            entity.project_id, patch["name"], exclude_id=entity_id
        ):
            raise ConflictError(DUPLICATE_ENTITY_MESSAGE)

        updated = await self.entity_repo.update(entity_id, patch)
        if updated is None:
            raise NotFoundError.for_resource("Entity", entity_id)
        await commit_or_conflict(self.session, DUPLICATE_ENTITY_MESSAGE)
        logger.info("entity_updated", entity_id=str(entity_id), fields=sorted(patch))
        return updated

    async def delete_entity(self, entity_id: UUID, project_id: UUID | None = None) -> None:
        """Delete an entity with its fields and every relationship touching it."""
        await self.get_entity(entity_id, project_id)
        cleared = await self.field_repo.clear_references(entity_id=entity_id)
        if not await self.entity_repo.delete(entity_id):
            raise NotFoundError.for_resource("Entity", entity_id)
        await self.session.commit()
        logger.info("entity_deleted", entity_id=str(entity_id), cleared_references=cleared)
