"""Repository behaviour against a real SQLite database."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.oroya.models import (
    Entity,
    EntityField,
    EntityRelationship,
    FieldFile,
    Project,
    RelationshipType,
)
from src.oroya.models.base import new_id
from src.oroya.repositories import (
    EntityRepository,
    FieldRepository,
    FileRepository,
    ProjectRepository,
    RelationshipRepository,
)
from tests.factories import EntityFactory, FieldFactory, FileRecordFactory, ProjectFactory

pytestmark = pytest.mark.integration


async def test_create_and_get_round_trip(db_session: AsyncSession):
    repo = ProjectRepository(db_session)
    project_id = new_id()

    created = await repo.create(project_id, {"name": "Inventory", "description": "Stock"})
    await db_session.commit()

    fetched = await repo.get_by_id(project_id)
    assert fetched is not None
    assert fetched.id == created.id == project_id
    assert fetched.name == "Inventory"
    assert fetched.created_at is not None


async def test_empty_update_returns_record_unchanged(db_session: AsyncSession, project: Project):
    repo = ProjectRepository(db_session)
    before = project.updated_at

    unchanged = await repo.update(project.id, {})

    assert unchanged is not None
    assert unchanged.name == "Shop"
    assert unchanged.updated_at == before


async def test_update_touches_updated_at(db_session: AsyncSession, project: Project):
    repo = ProjectRepository(db_session)
    before = project.updated_at

    updated = await repo.update(project.id, {"description": "Online shop"})
    await db_session.commit()

    assert updated is not None
    assert updated.description == "Online shop"
    assert updated.updated_at >= before


async def test_update_missing_returns_none(db_session: AsyncSession):
    assert await ProjectRepository(db_session).update(new_id(), {"name": "Ghost"}) is None


async def test_delete_missing_returns_false(db_session: AsyncSession):
    assert await ProjectRepository(db_session).delete(new_id()) is False


async def test_name_taken_is_case_insensitive(db_session: AsyncSession, project: Project):
    repo = ProjectRepository(db_session)

    assert await repo.name_taken("SHOP")
    assert not await repo.name_taken("shop", exclude_id=project.id)


async def test_deleting_project_cascades(db_session: AsyncSession, field: EntityField):
    entity = await EntityRepository(db_session).get_by_id(field.entity_id)
    assert entity is not None
    other = EntityFactory.build(project_id=entity.project_id, name="Order")
    db_session.add(other)
    await db_session.flush()
    db_session.add(
        EntityRelationship(
            id=new_id(),
            source_entity_id=entity.id,
            target_entity_id=other.id,
            relationship_type=RelationshipType.ONE_TO_MANY,
            source_field_id=field.id,
        )
    )
    file = FileRecordFactory.build()
    db_session.add(file)
    await db_session.flush()
    db_session.add(FieldFile(id=new_id(), field_id=field.id, record_id="r1", file_id=file.id))
    await db_session.commit()

    assert await ProjectRepository(db_session).delete(entity.project_id)
    await db_session.commit()
    db_session.expunge_all()

    assert not await EntityRepository(db_session).exists(entity.id)
    assert not await FieldRepository(db_session).exists(field.id)
    assert await RelationshipRepository(db_session).list_all() == []
    file_repo = FileRepository(db_session)
    assert await file_repo.list_by_field_and_record(field.id, "r1") == []
    # The file row itself stays behind as an orphan
    assert [f.id for f in await file_repo.list_orphans()] == [file.id]


async def test_deleting_anchor_field_nulls_relationship(
    db_session: AsyncSession, entity: Entity, field: EntityField
):
    other = EntityFactory.build(project_id=entity.project_id, name="Order")
    db_session.add(other)
    await db_session.flush()
    relationship = EntityRelationship(
        id=new_id(),
        source_entity_id=entity.id,
        target_entity_id=other.id,
        relationship_type=RelationshipType.MANY_TO_ONE,
        source_field_id=field.id,
    )
    db_session.add(relationship)
    await db_session.commit()

    await FieldRepository(db_session).delete(field.id)
    await db_session.commit()
    db_session.expunge_all()

    stored = await RelationshipRepository(db_session).get_by_id(relationship.id)
    assert stored is not None
    assert stored.source_field_id is None


async def test_edge_exists_treats_missing_fields_as_equal(
    db_session: AsyncSession, entity: Entity
):
    other = EntityFactory.build(project_id=entity.project_id, name="Order")
    db_session.add(other)
    await db_session.flush()
    db_session.add(
        EntityRelationship(
            id=new_id(),
            source_entity_id=entity.id,
            target_entity_id=other.id,
            relationship_type=RelationshipType.ONE_TO_ONE,
        )
    )
    await db_session.commit()
    repo = RelationshipRepository(db_session)

    assert await repo.edge_exists(entity.id, other.id, None, None)
    assert not await repo.edge_exists(other.id, entity.id, None, None)
    assert await repo.exists_between_entities(entity.id, other.id)


async def test_storage_stats_counts(db_session: AsyncSession):
    db_session.add(FileRecordFactory.build(size=100))
    db_session.add(FileRecordFactory.build(size=50, is_image=True, mimetype="image/png"))
    await db_session.commit()

    stats = await FileRepository(db_session).storage_stats()

    assert stats["total_files"] == 2
    assert stats["total_size"] == 150
    assert stats["images_count"] == 1
    assert stats["documents_count"] == 1
    assert stats["orphan_files_count"] == 2


async def test_projects_listed_newest_first(db_session: AsyncSession):
    older = ProjectFactory.build(name="Older")
    newer = ProjectFactory.build(name="Newer")
    newer.created_at = older.created_at.replace(year=older.created_at.year + 1)
    db_session.add_all([older, newer])
    await db_session.commit()

    names = [p.name for p in await ProjectRepository(db_session).list_all()]

    assert names == ["Newer", "Older"]


async def test_field_names_scoped_to_entity(db_session: AsyncSession, entity: Entity):
    db_session.add(FieldFactory.build(entity_id=entity.id, name="price"))
    await db_session.commit()

    names = await FieldRepository(db_session).list_names_in_entity(entity.id)

    assert names == ["price"]


async def test_clear_references_to_project_entities(
    db_session: AsyncSession, field: EntityField
):
    entity = await EntityRepository(db_session).get_by_id(field.entity_id)
    assert entity is not None
    elsewhere = ProjectFactory.build(name="Elsewhere")
    db_session.add(elsewhere)
    await db_session.flush()
    consumer = EntityFactory.build(project_id=elsewhere.id, name="Invoice")
    db_session.add(consumer)
    await db_session.flush()
    referrer = FieldFactory.build(
        entity_id=consumer.id,
        name="productPrice",
        is_foreign_key=True,
        foreign_entity_id=entity.id,
        foreign_field_id=field.id,
    )
    plain = FieldFactory.build(entity_id=consumer.id, name="total")
    db_session.add_all([referrer, plain])
    await db_session.commit()
    repo = FieldRepository(db_session)

    cleared = await repo.clear_references(project_id=entity.project_id)
    assert await ProjectRepository(db_session).delete(entity.project_id)
    await db_session.commit()
    db_session.expunge_all()

    assert cleared == 1
    stored = await repo.get_by_id(referrer.id)
    assert stored is not None
    assert stored.is_foreign_key is False
    assert stored.foreign_entity_id is None
    assert stored.foreign_field_id is None
