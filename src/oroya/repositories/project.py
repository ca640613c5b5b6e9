"""Repository for Project entity."""

from uuid import UUID

from sqlalchemy import func, literal
from sqlmodel import select

from src.oroya.models import Project
from src.oroya.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_all(self) -> list[Project]:
        """List all projects, newest first."""
        result = await self.session.execute(select(Project).order_by(Project.created_at.desc()))  # type: ignore[attr-defined]
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Project | None:
        """Get project by name, ignoring case."""
        result = await self.session.execute(
            select(Project).where(func.lower(Project.name) == name.lower())
        )
        return result.scalars().first()

    async def name_taken(self, name: str, exclude_id: UUID | None = None) -> bool:
        """Check whether another project already uses this name (case-insensitive)."""
        query = select(literal(1)).where(func.lower(Project.name) == name.lower())
        if exclude_id is not None:
            query = query.where(Project.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_names(self) -> list[str]:
        result = await self.session.execute(select(Project.name))
        return list(result.scalars().all())
