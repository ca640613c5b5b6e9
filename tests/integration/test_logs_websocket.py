"""Live log stream over WebSocket, with the full application lifespan."""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.oroya.core.config import get_settings
from src.oroya.core.db import engine as engine_module
from src.oroya.main import create_app

pytestmark = pytest.mark.integration


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient]:
    """TestClient with lifespan, migrating a fresh database on startup."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'ws.db'}")
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path / "storage"))
    monkeypatch.setenv("AUTO_MIGRATE", "true")
    monkeypatch.setattr(engine_module, "_engine", None)
    get_settings.cache_clear()

    with TestClient(create_app()) as c:
        yield c

    get_settings.cache_clear()


def test_joined_client_receives_new_logs(client: TestClient):
    with client.websocket_connect("/ws/logs") as ws:
        ws.send_json({"event": "join-logs", "data": {"method": "POST"}})
        joined = ws.receive_json()
        assert joined["event"] == "joined-logs"
        assert joined["data"]["filters"]["method"] == "POST"

        client.get("/api/projects")
        created = client.post("/api/projects", json={"name": "Streamed"})
        assert created.status_code == 201

        message = ws.receive_json()
        assert message["event"] == "new-log"
        assert message["data"]["method"] == "POST"
        assert message["data"]["url"] == "/api/projects"
        assert message["data"]["statusCode"] == 201


def test_ping_and_unknown_events(client: TestClient):
    with client.websocket_connect("/ws/logs") as ws:
        ws.send_json({"event": "ping"})
        assert ws.receive_json() == {"event": "pong"}

        ws.send_json({"event": "shout"})
        assert ws.receive_json() == {"event": "error", "data": {"message": "Unknown event: shout"}}

        ws.send_text("not json")
        assert ws.receive_json()["data"]["message"] == "Messages must be JSON"

        ws.send_bytes(b"\x00\x01")
        assert ws.receive_json() == {
            "event": "error",
            "data": {"message": "Messages must be JSON text frames"},
        }

        # The connection is still usable
        ws.send_json({"event": "ping"})
        assert ws.receive_json() == {"event": "pong"}


def test_invalid_filters_rejected(client: TestClient):
    with client.websocket_connect("/ws/logs") as ws:
        ws.send_json({"event": "join-logs", "data": {"status": "200"}})

        message = ws.receive_json()

        assert message["event"] == "error"
        assert "status must be one of" in message["data"]["message"]


def test_subscriber_count_in_analytics_health(client: TestClient):
    with client.websocket_connect("/ws/logs") as ws:
        ws.send_json({"event": "join-logs"})
        ws.receive_json()

        health = client.get("/api/analytics/health").json()
        assert health["logStreamSubscribers"] == 1

        ws.send_json({"event": "leave-logs"})
        assert ws.receive_json() == {"event": "left-logs"}

    assert client.get("/api/analytics/health").json()["logStreamSubscribers"] == 0
