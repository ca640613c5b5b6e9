"""In-process fan-out of recorded API logs to live subscribers.

The broadcaster is owned by the application (`app.state.log_broadcaster`)
and never blocks the request path: each subscriber has a bounded queue,
and when a slow subscriber's queue is full its oldest entry is dropped.
"""

import asyncio
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from src.oroya.core.exceptions import ValidationError
from src.oroya.core.logging import get_logger
from src.oroya.models.enums import LogLevel
from src.oroya.schemas.analytics import ApiLogRead

logger = get_logger(__name__)

STATUS_CLASS_REGEX: Final[str] = r"^[1-5]xx$"
_STATUS_CLASS_PATTERN: Final[re.Pattern[str]] = re.compile(STATUS_CLASS_REGEX)


@dataclass(frozen=True)
class LogStreamFilter:
    """Subscription filters. A log is delivered only if it matches every set filter."""

    project_id: str | None = None
    method: str | None = None
    status: str | None = None  # status class: "2xx".."5xx"
    level: LogLevel | None = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any] | None) -> "LogStreamFilter":
        """Build filters from a client message, accepting camelCase or snake_case keys."""
        data = data or {}
        project_id = data.get("projectId", data.get("project_id"))
        method = data.get("method")
        status = data.get("status")
        level = data.get("level")

        if status is not None and not _STATUS_CLASS_PATTERN.match(str(status)):
            raise ValidationError("status must be one of 1xx, 2xx, 3xx, 4xx, 5xx")
        try:
            parsed_level = LogLevel(level) if level is not None else None
        except ValueError as e:
            raise ValidationError("level must be one of info, warn, error") from e

        return cls(
            project_id=str(project_id) if project_id else None,
            method=str(method).upper() if method else None,
            status=str(status) if status else None,
            level=parsed_level,
        )

    def matches(self, log: ApiLogRead) -> bool:
        if self.project_id is not None and log.project_id != self.project_id:
            return False
        if self.method is not None and log.method.upper() != self.method:
            return False
        if self.status is not None and str(log.status_code)[0] != self.status[0]:
            return False
        if self.level is not None and LogLevel.for_status(log.status_code) != self.level:
            return False
        return True

    def as_dict(self) -> dict[str, Any]:
        return {
            "projectId": self.project_id,
            "method": self.method,
            "status": self.status,
            "level": self.level.value if self.level else None,
        }


class Subscription:
    """A live feed of matching logs. Call `close()` to stop receiving."""

    def __init__(self, broadcaster: "LogBroadcaster", filters: LogStreamFilter, maxsize: int):
        self._broadcaster = broadcaster
        self.filters = filters
        self.queue: asyncio.Queue[ApiLogRead] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0
        self.closed = False

    def offer(self, log: ApiLogRead) -> bool:
        """Enqueue a log if it matches, evicting the oldest entry when full."""
        if self.closed or not self.filters.matches(log):
            return False
        if self.queue.full():
            self.queue.get_nowait()
            self.dropped += 1
        self.queue.put_nowait(log)
        return True

    async def get(self) -> ApiLogRead:
        return await self.queue.get()

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._broadcaster._remove(self)


class LogBroadcaster:
    """Publishes logs to every subscription whose filters match."""

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._subscriptions: set[Subscription] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, filters: LogStreamFilter | None = None) -> Subscription:
        subscription = Subscription(self, filters or LogStreamFilter(), self.queue_size)
        self._subscriptions.add(subscription)
        logger.debug("log_stream_subscribed", subscribers=self.subscriber_count)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        self._subscriptions.discard(subscription)
        logger.debug("log_stream_unsubscribed", subscribers=self.subscriber_count)

    def publish(self, log: ApiLogRead) -> int:
        """Deliver a log without waiting on subscribers. Returns the delivery count."""
        return sum(1 for subscription in list(self._subscriptions) if subscription.offer(log))

    def close_all(self) -> None:
        for subscription in list(self._subscriptions):
            subscription.close()
