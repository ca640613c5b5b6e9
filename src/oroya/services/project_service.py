"""Project management service."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.oroya.core.exceptions import ConflictError, NotFoundError
from src.oroya.core.logging import get_logger
from src.oroya.core.validators import DUPLICATE_PROJECT_MESSAGE
from src.oroya.models import Project
from src.oroya.models.base import new_id
from src.oroya.repositories import FieldRepository, ProjectRepository
from src.oroya.schemas.project import ProjectCreate, ProjectUpdate
from src.oroya.services.common import commit_or_conflict

logger = get_logger(__name__)


class ProjectService:
    """Project CRUD with case-insensitive name uniqueness."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        field_repo: FieldRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.field_repo = field_repo
        self.session = session

    async def list_projects(self) -> list[Project]:
        return await self.project_repo.list_all()

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError.for_resource("Project", project_id)
        return project

    async def _ensure_name_available(self, name: str, exclude_id: UUID | None = None) -> None:
        if await self.project_repo.name_taken(name, exclude_id=exclude_id):
            raise ConflictError(DUPLICATE_PROJECT_MESSAGE)

    async def create_project(self, data: ProjectCreate) -> Project:
        await self._ensure_name_available(data.name)
        project = await self.project_repo.create(new_id(), data.model_dump())
        await commit_or_conflict(self.session, DUPLICATE_PROJECT_MESSAGE)
        logger.info("project_created", project_id=str(project.id), name=project.name)
        return project

    async def replace_project(self, project_id: UUID, data: ProjectCreate) -> Project:
        """Full update: name is required, an omitted description is cleared."""
        await self.get_project(project_id)
        await self._ensure_name_available(data.name, exclude_id=project_id)
        return await self._apply(project_id, data.model_dump())

    async def update_project(self, project_id: UUID, data: ProjectUpdate) -> Project:
        await self.get_project(project_id)
        patch = data.to_patch()
        if "name" in patch:
            await self._ensure_name_available(patch["name"], exclude_id=project_id)
        return await self._apply(project_id, patch)

    async def _apply(self, project_id: UUID, patch: dict[str, Any]) -> Project:
        project = await self.project_repo.update(project_id, patch)
        if project is None:
            raise NotFoundError.for_resource("Project", project_id)
        await commit_or_conflict(self.session, DUPLICATE_PROJECT_MESSAGE)
        logger.info("project_updated", project_id=str(project_id), fields=sorted(patch))
        return project

    async def delete_project(self, project_id: UUID) -> None:
        """Delete a project. Its entities and their fields go with it."""
        cleared = await self.field_repo.clear_references(project_id=project_id)
        deleted = await self.project_repo.delete(project_id)
        if not deleted:
            raise NotFoundError.for_resource("Project", project_id)
        await self.session.commit()
        logger.info("project_deleted", project_id=str(project_id), cleared_references=cleared)
