"""Relationship endpoints."""

import pytest
from httpx import AsyncClient

from src.oroya.models import Entity, EntityField
from src.oroya.models.base import new_id

pytestmark = pytest.mark.integration


@pytest.fixture
async def order(client: AsyncClient, entity: Entity) -> dict:
    response = await client.post(
        f"/api/projects/{entity.project_id}/entities", json={"name": "Order"}
    )
    return response.json()


async def test_create_and_list_with_names(
    client: AsyncClient, entity: Entity, field: EntityField, order: dict
):
    response = await client.post(
        "/api/relationships",
        json={
            "sourceEntityId": str(entity.id),
            "targetEntityId": order["id"],
            "relationshipType": "one_to_many",
            "sourceFieldId": str(field.id),
            "name": "orders",
        },
    )

    assert response.status_code == 201
    created = response.json()
    assert created["relationshipType"] == "one_to_many"
    assert created["isRequired"] is False

    listed = (await client.get("/api/relationships")).json()
    assert len(listed) == 1
    assert listed[0]["sourceEntityName"] == "Product"
    assert listed[0]["targetEntityName"] == "Order"
    assert listed[0]["sourceFieldName"] == "price"
    assert listed[0]["targetFieldName"] is None


async def test_duplicate_edge_rejected(client: AsyncClient, entity: Entity, order: dict):
    body = {
        "sourceEntityId": str(entity.id),
        "targetEntityId": order["id"],
        "relationshipType": "one_to_one",
    }
    assert (await client.post("/api/relationships", json=body)).status_code == 201

    response = await client.post("/api/relationships", json=body)

    assert response.status_code == 400
    assert response.json()["message"] == "This relationship already exists"


async def test_anchor_field_must_belong_to_entity(
    client: AsyncClient, entity: Entity, field: EntityField, order: dict
):
    response = await client.post(
        "/api/relationships",
        json={
            "sourceEntityId": order["id"],
            "targetEntityId": str(entity.id),
            "relationshipType": "many_to_one",
            "sourceFieldId": str(field.id),
        },
    )

    assert response.status_code == 400
    assert response.json()["message"] == "The source field does not belong to the source entity"


async def test_missing_entity(client: AsyncClient, entity: Entity):
    missing = new_id()
    response = await client.post(
        "/api/relationships",
        json={
            "sourceEntityId": str(entity.id),
            "targetEntityId": str(missing),
            "relationshipType": "one_to_one",
        },
    )

    assert response.status_code == 404
    assert response.json()["message"] == f"Target entity {missing} not found"


async def test_exists_check(client: AsyncClient, entity: Entity, order: dict):
    created = await client.post(
        "/api/relationships",
        json={
            "sourceEntityId": str(entity.id),
            "targetEntityId": order["id"],
            "relationshipType": "many_to_many",
        },
    )
    params = {"sourceEntityId": str(entity.id), "targetEntityId": order["id"]}

    assert (await client.get("/api/relationships/exists", params=params)).json() == {
        "exists": True
    }
    excluded = {**params, "excludeId": created.json()["id"]}
    assert (await client.get("/api/relationships/exists", params=excluded)).json() == {
        "exists": False
    }
    reverse = {"sourceEntityId": order["id"], "targetEntityId": str(entity.id)}
    assert (await client.get("/api/relationships/exists", params=reverse)).json() == {
        "exists": False
    }


async def test_update_get_and_delete(client: AsyncClient, entity: Entity, order: dict):
    created = (
        await client.post(
            "/api/relationships",
            json={
                "sourceEntityId": str(entity.id),
                "targetEntityId": order["id"],
                "relationshipType": "one_to_one",
            },
        )
    ).json()
    url = f"/api/relationships/{created['id']}"

    updated = await client.put(url, json={"relationshipType": "one_to_many", "isRequired": True})
    assert updated.status_code == 200
    assert updated.json()["relationshipType"] == "one_to_many"
    assert (await client.get(url)).json()["isRequired"] is True

    by_entity = await client.get(f"/api/entities/{order['id']}/relationships")
    assert [r["id"] for r in by_entity.json()] == [created["id"]]

    assert (await client.delete(url)).status_code == 204
    assert (await client.get(url)).status_code == 404


async def test_deleting_entity_removes_relationships(
    client: AsyncClient, entity: Entity, order: dict
):
    await client.post(
        "/api/relationships",
        json={
            "sourceEntityId": str(entity.id),
            "targetEntityId": order["id"],
            "relationshipType": "one_to_one",
        },
    )

    await client.delete(f"/api/entities/{order['id']}")

    assert (await client.get("/api/relationships")).json() == []


async def test_invalid_relationship_type(client: AsyncClient, entity: Entity, order: dict):
    response = await client.post(
        "/api/relationships",
        json={
            "sourceEntityId": str(entity.id),
            "targetEntityId": order["id"],
            "relationshipType": "some_to_some",
        },
    )

    assert response.status_code == 400
