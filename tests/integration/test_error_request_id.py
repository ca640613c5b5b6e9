"""Tests for request_id in error responses."""

import pytest
from httpx import AsyncClient

from src.oroya.models.base import new_id

pytestmark = pytest.mark.integration


async def test_not_found_includes_request_id(client: AsyncClient):
    response = await client.get(f"/api/projects/{new_id()}")

    assert response.status_code == 404
    data = response.json()
    assert set(data) == {"error", "message", "request_id"}
    assert data["request_id"] == response.headers["x-request-id"]


async def test_unknown_route_uses_error_shape(client: AsyncClient):
    response = await client.get("/api/nonexistent-endpoint")

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Not Found"
    assert data["request_id"]


async def test_validation_error_is_400(client: AsyncClient):
    response = await client.post("/api/projects", json={"description": "no name"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Validation Error"
    assert data["message"] == "name: Field required"
    assert data["request_id"]


async def test_malformed_id_is_400(client: AsyncClient):
    response = await client.get("/api/projects/not-a-uuid")

    assert response.status_code == 400


async def test_request_id_is_propagated(client: AsyncClient):
    request_id = "5f1c3b4e-2d8a-4e1b-9c7f-1a2b3c4d5e6f"
    response = await client.get(f"/api/projects/{new_id()}", headers={"X-Request-ID": request_id})

    assert response.json()["request_id"] == request_id


async def test_different_requests_have_different_ids(client: AsyncClient):
    first = await client.get(f"/api/projects/{new_id()}")
    second = await client.get(f"/api/projects/{new_id()}")

    assert first.json()["request_id"] != second.json()["request_id"]
