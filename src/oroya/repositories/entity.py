"""Repository for Entity."""

from uuid import UUID

from sqlalchemy import func, literal
from sqlmodel import select

from src.oroya.models import Entity
from src.oroya.repositories.base import BaseRepository


class EntityRepository(BaseRepository[Entity]):
    """Repository for entities, scoped by project where relevant."""

    model = Entity

    async def list_all(self) -> list[Entity]:
        result = await self.session.execute(select(Entity).order_by(Entity.created_at.desc()))  # type: ignore[attr-defined]
        return list(result.scalars().all())

    async def list_by_project(self, project_id: UUID) -> list[Entity]:
        """List a project's entities, newest first."""
        result = await self.session.execute(
            select(Entity)
            .where(Entity.project_id == project_id)
            .order_by(Entity.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def belongs_to_project(self, entity_id: UUID, project_id: UUID) -> bool:
        result = await self.session.execute(
            select(literal(1))
            .where(Entity.id == entity_id, Entity.project_id == project_id)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def name_taken_in_project(
        self, project_id: UUID, name: str, exclude_id: UUID | None = None
    ) -> bool:
        """Check for a case-insensitive name clash among a project's entities."""
        query = select(literal(1)).where(
            Entity.project_id == project_id,
            func.lower(Entity.name) == name.lower(),
        )
        if exclude_id is not None:
            query = query.where(Entity.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_names_in_project(self, project_id: UUID) -> list[str]:
        result = await self.session.execute(
            select(Entity.name).where(Entity.project_id == project_id)
        )
        return list(result.scalars().all())
