"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite file and storage directory under tmp_path.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

import src.oroya.models  # noqa: F401 - register tables on the metadata
from src.oroya.core import db
from src.oroya.core.config import Settings, get_settings
from src.oroya.main import create_app
from src.oroya.models import Entity, EntityField, Project
from tests.factories import EntityFactory, FieldFactory, ProjectFactory


@pytest.fixture
async def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Settings]:
    """Point the app at a fresh database file and storage directory."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path / "storage"))
    get_settings.cache_clear()
    await db.dispose_engine()

    yield get_settings()

    await db.dispose_engine()
    get_settings.cache_clear()


@pytest.fixture
async def engine(settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create all tables on the per-test database."""
    test_engine = db.get_engine()
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit. Tests must call `await session.commit()`
    to persist changes.
    """
    async with db.get_session(engine) as session:
        yield session


@pytest.fixture
async def app(engine: AsyncEngine) -> FastAPI:
    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the app. Lifespan is not run."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def project(db_session: AsyncSession) -> Project:
    project = ProjectFactory.build(name="Shop")
    db_session.add(project)
    await db_session.commit()
    return project


@pytest.fixture
async def entity(db_session: AsyncSession, project: Project) -> Entity:
    entity = EntityFactory.build(project_id=project.id, name="Product")
    db_session.add(entity)
    await db_session.commit()
    return entity


@pytest.fixture
async def field(db_session: AsyncSession, entity: Entity) -> EntityField:
    field = FieldFactory.build(entity_id=entity.id, name="price")
    db_session.add(field)
    await db_session.commit()
    return field
