"""Tests for the in-process log broadcaster."""

from datetime import datetime

import pytest

from src.oroya.core.exceptions import ValidationError
from src.oroya.models.base import new_id
from src.oroya.models.enums import LogLevel
from src.oroya.services.log_stream import LogBroadcaster, LogStreamFilter
from src.oroya.schemas.analytics import ApiLogRead

pytestmark = pytest.mark.unit


def make_log(
    method: str = "GET",
    status_code: int = 200,
    project_id: str | None = None,
    url: str = "/api/projects",
) -> ApiLogRead:
    return ApiLogRead(
        id=new_id(),
        timestamp=datetime(2026, 1, 1, 12, 0, 0),
        method=method,
        url=url,
        status_code=status_code,
        response_time=12.5,
        ip_address="127.0.0.1",
        user_agent="pytest",
        project_id=project_id,
        entity_type=None,
        entity_id=None,
        request_size=None,
        response_size=None,
        error_message=None,
        query_params=None,
        headers=None,
        referrer=None,
        request_id=None,
    )


class TestLogStreamFilter:
    def test_empty_filter_matches_everything(self):
        assert LogStreamFilter().matches(make_log(status_code=503))

    def test_all_criteria_must_match(self):
        filters = LogStreamFilter(project_id="p1", method="POST", status="4xx")
        assert filters.matches(make_log("POST", 404, "p1"))
        assert not filters.matches(make_log("GET", 404, "p1"))
        assert not filters.matches(make_log("POST", 201, "p1"))
        assert not filters.matches(make_log("POST", 404, "p2"))

    def test_level_filter_uses_status(self):
        filters = LogStreamFilter(level=LogLevel.ERROR)
        assert filters.matches(make_log(status_code=500))
        assert not filters.matches(make_log(status_code=404))

    def test_from_payload_accepts_camel_case(self):
        filters = LogStreamFilter.from_payload(
            {"projectId": "p1", "method": "delete", "status": "2xx", "level": "info"}
        )
        assert filters == LogStreamFilter(
            project_id="p1", method="DELETE", status="2xx", level=LogLevel.INFO
        )

    def test_from_payload_none_gives_empty_filter(self):
        assert LogStreamFilter.from_payload(None) == LogStreamFilter()

    @pytest.mark.parametrize("payload", [{"status": "200"}, {"status": "6xx"}, {"level": "debug"}])
    def test_from_payload_rejects_bad_values(self, payload):
        with pytest.raises(ValidationError):
            LogStreamFilter.from_payload(payload)

    def test_as_dict_uses_camel_case(self):
        data = LogStreamFilter(project_id="p1", level=LogLevel.WARN).as_dict()
        assert data == {"projectId": "p1", "method": None, "status": None, "level": "warn"}


class TestLogBroadcaster:
    async def test_publish_delivers_to_matching_subscribers(self):
        broadcaster = LogBroadcaster()
        everything = broadcaster.subscribe()
        errors_only = broadcaster.subscribe(LogStreamFilter(status="5xx"))

        log = make_log(status_code=200)
        assert broadcaster.publish(log) == 1

        assert await everything.get() == log
        assert errors_only.queue.empty()

    async def test_full_queue_drops_oldest(self):
        broadcaster = LogBroadcaster(queue_size=2)
        subscription = broadcaster.subscribe()
        logs = [make_log(url=f"/api/projects/{i}") for i in range(3)]

        for log in logs:
            broadcaster.publish(log)

        assert subscription.dropped == 1
        assert await subscription.get() == logs[1]
        assert await subscription.get() == logs[2]

    def test_close_unsubscribes(self):
        broadcaster = LogBroadcaster()
        subscription = broadcaster.subscribe()
        assert broadcaster.subscriber_count == 1

        subscription.close()
        subscription.close()

        assert broadcaster.subscriber_count == 0
        assert broadcaster.publish(make_log()) == 0

    def test_close_all(self):
        broadcaster = LogBroadcaster()
        subscriptions = [broadcaster.subscribe() for _ in range(3)]

        broadcaster.close_all()

        assert broadcaster.subscriber_count == 0
        assert all(s.closed for s in subscriptions)
