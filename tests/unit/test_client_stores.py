"""Tests for the client stores using a mocked HTTP transport."""

import json
from collections.abc import Callable
from pathlib import Path
from uuid import UUID

import httpx
import pytest

from src.oroya.client import EntityStore, FieldStore, FileStore, OroyaClient, ProjectStore
from src.oroya.models.base import new_id

pytestmark = pytest.mark.unit

NOW = "2026-01-01T12:00:00"


def project_json(name: str = "Shop", project_id: UUID | None = None) -> dict:
    return {
        "id": str(project_id or new_id()),
        "name": name,
        "description": None,
        "createdAt": NOW,
        "updatedAt": NOW,
    }


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> OroyaClient:
    return OroyaClient("http://oroya.test", transport=httpx.MockTransport(handler))


def server_down(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def server_error(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        500, json={"error": "Internal Server Error", "message": "boom", "request_id": None}
    )


class TestProjectStore:
    async def test_fetch_replaces_items(self):
        projects = [project_json("Shop"), project_json("Blog")]
        client = make_client(lambda request: httpx.Response(200, json=projects))
        store = ProjectStore(client)

        result = await store.fetch()

        assert result.ok and not result.is_local
        assert [p.name for p in store.items] == ["Shop", "Blog"]
        assert store.error is None
        assert store.loading is False

    async def test_create_posts_to_server(self):
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            seen.append(body)
            return httpx.Response(201, json=project_json(body["name"]))

        store = ProjectStore(make_client(handler))
        result = await store.create("Shop", "Online shop")

        assert result.ok and result.source == "remote"
        assert seen == [{"name": "Shop", "description": "Online shop"}]
        assert store.items[0].name == "Shop"

    async def test_create_falls_back_locally_when_unreachable(self):
        store = ProjectStore(make_client(server_down))

        result = await store.create("Shop")

        assert result.ok and result.is_local
        assert result.value in store.items
        assert store.error == "API unavailable, project created locally"

    async def test_create_falls_back_locally_on_server_error(self):
        store = ProjectStore(make_client(server_error))

        result = await store.create("Shop")

        assert result.is_local
        assert len(store.items) == 1

    async def test_client_error_is_returned_as_err(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400, json={"error": "Conflict", "message": "A project with this name already exists"}
            )

        store = ProjectStore(make_client(handler))
        result = await store.create("Shop")

        assert not result.ok
        assert result.reason == "A project with this name already exists"
        assert store.items == []
        assert store.error == result.reason

    async def test_duplicate_rejected_before_request(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(201, json=project_json("Shop"))

        store = ProjectStore(make_client(handler))
        await store.create("Shop")
        result = await store.create("shop")

        assert not result.ok
        assert result.reason == "A project with this name already exists"
        assert len(calls) == 1

    async def test_invalid_name_rejected_locally(self):
        store = ProjectStore(make_client(server_down))

        result = await store.create("ab")

        assert not result.ok
        assert result.reason == "Project name must be at least 3 characters"

    async def test_update_offline_patches_mirror(self):
        store = ProjectStore(make_client(server_down))
        created = await store.create("Shop")
        store.select(created.value.id)

        result = await store.update(created.value.id, name="Market")

        assert result.is_local
        assert store.get(created.value.id).name == "Market"
        assert store.current.name == "Market"
        assert store.error == "API unavailable, changes saved locally"

    async def test_update_unknown_project(self):
        store = ProjectStore(make_client(server_down))
        missing = new_id()

        result = await store.update(missing, name="Market")

        assert result.reason == f"Project {missing} is not loaded"

    async def test_update_of_project_removed_while_offline(self):
        store: ProjectStore

        def removed_then_down(request: httpx.Request) -> httpx.Response:
            store.items.clear()
            raise httpx.ConnectError("connection refused", request=request)

        store = ProjectStore(make_client(server_down))
        created = await store.create("Shop")
        store.client = make_client(removed_then_down)

        result = await store.update(created.value.id, name="Market")

        assert not result.ok
        assert result.reason == f"Project {created.value.id} is not loaded"
        assert store.items == []
        assert store.loading is False

    async def test_delete_clears_current(self):
        store = ProjectStore(make_client(lambda request: httpx.Response(200, json={})))
        store.items = [store.item_model.model_validate(project_json("Shop"))]
        project_id = store.items[0].id
        store.select(project_id)

        result = await store.delete(project_id)

        assert result.ok
        assert store.items == []
        assert store.current is None

    async def test_state_survives_reload(self, tmp_path: Path):
        path = tmp_path / "projects.json"
        store = ProjectStore(make_client(server_down), storage_path=path)
        await store.create("Shop")

        restored = ProjectStore(make_client(server_down), storage_path=path)
        await restored.load()

        assert [p.name for p in restored.items] == ["Shop"]

    async def test_load_ignores_corrupt_state(self, tmp_path: Path):
        path = tmp_path / "projects.json"
        path.write_text("not json")
        store = ProjectStore(make_client(server_down), storage_path=path)

        await store.load()

        assert store.items == []

    async def test_subscribe_and_unsubscribe(self):
        store = ProjectStore(make_client(server_down))
        calls = []
        unsubscribe = store.subscribe(lambda: calls.append(store.loading))

        await store.create("Shop")
        assert True in calls and calls[-1] is False

        unsubscribe()
        count = len(calls)
        await store.create("Blog")
        assert len(calls) == count


class TestEntityStore:
    async def test_fetch_replaces_only_that_project(self):
        project_a, project_b = new_id(), new_id()

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=[
                    {
                        "id": str(new_id()),
                        "projectId": str(project_a),
                        "name": "Product",
                        "description": None,
                        "createdAt": NOW,
                        "updatedAt": NOW,
                    }
                ],
            )

        store = EntityStore(make_client(server_down))
        await store.create(project_b, "Order")
        store.client = make_client(handler)

        result = await store.fetch(project_a)

        assert result.ok
        assert [e.name for e in store.for_project(project_a)] == ["Product"]
        assert [e.name for e in store.for_project(project_b)] == ["Order"]

    async def test_duplicates_scoped_to_project(self):
        store = EntityStore(make_client(server_down))
        project_a, project_b = new_id(), new_id()

        assert (await store.create(project_a, "Product")).ok
        assert (await store.create(project_b, "Product")).ok
        result = await store.create(project_a, "product")

        assert result.reason == "An entity with this name already exists"


class TestFieldStore:
    async def test_reserved_name_rejected(self):
        store = FieldStore(make_client(server_down))

        result = await store.create(new_id(), name="id", type="string")

        assert result.reason == "Reserved words cannot be used as field names"

    async def test_invalid_options_rejected(self):
        store = FieldStore(make_client(server_down))

        result = await store.create(
            new_id(), name="attachment", type="file", max_file_size=60_000_000
        )

        assert result.reason == "Max file size cannot exceed 50MB"

    async def test_created_locally_when_offline(self):
        store = FieldStore(make_client(server_down))
        entity_id = new_id()

        result = await store.create(entity_id, name="price", type="decimal", required=True)

        assert result.is_local
        assert result.value.entity_id == entity_id
        assert result.value.required is True
        assert store.for_entity(entity_id) == [result.value]


class TestFileStore:
    async def test_upload_requires_server(self):
        store = FileStore(make_client(server_down))

        result = await store.upload([("a.txt", b"hello", "text/plain")])

        assert not result.ok
        assert result.reason == "API unavailable, files were not uploaded"
        assert store.items == []
