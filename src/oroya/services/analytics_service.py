"""Analytics over recorded API requests."""

import re
from datetime import UTC, datetime, timedelta
from typing import Any, Final

from src.oroya.core.exceptions import NotFoundError, ValidationError
from src.oroya.models import ApiLog
from src.oroya.models.base import utc_now
from src.oroya.repositories import ApiLogRepository
from src.oroya.services.log_stream import LogBroadcaster

ALL_TIME: Final[str] = "all_time"
TIME_RANGE_REGEX: Final[str] = r"^\s*(\d+)\s*(minute|hour|day|week)s?\s*$"
_TIME_RANGE_PATTERN: Final[re.Pattern[str]] = re.compile(TIME_RANGE_REGEX, re.IGNORECASE)
_UNIT_SECONDS: Final[dict[str, int]] = {
    "minute": 60,
    "hour": 3600,
    "day": 86400,
    "week": 604800,
}
MAX_TIME_RANGE: Final[timedelta] = timedelta(days=36500)


def parse_time_range(value: str | None) -> timedelta | None:
    """Parse windows like "1 hour", "7 days" or "30 minutes".

    None, empty and "all_time" mean no window.
    """
    if value is None or not value.strip() or value == ALL_TIME:
        return None
    match = _TIME_RANGE_PATTERN.match(value)
    if match is None:
        raise ValidationError(
            "Invalid timeRange. Use '<n> minutes|hours|days|weeks', e.g. '24 hours'"
        )
    amount, unit = int(match.group(1)), match.group(2).lower()
    if amount <= 0:
        raise ValidationError("timeRange must be a positive duration")
    seconds = amount * _UNIT_SECONDS[unit]
    if seconds > MAX_TIME_RANGE.total_seconds():
        raise ValidationError("timeRange is too large, the longest window is 36500 days")
    return timedelta(seconds=seconds)


def _naive_utc(value: datetime | None) -> datetime | None:
    """Stored timestamps are naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class AnalyticsService:
    """Read-side queries for the request log."""

    def __init__(self, api_log_repo: ApiLogRepository, broadcaster: LogBroadcaster):
        self.api_log_repo = api_log_repo
        self.broadcaster = broadcaster

    async def get_stats(
        self, time_range: str | None = None, project_id: str | None = None
    ) -> dict[str, Any]:
        window = parse_time_range(time_range)
        since = utc_now() - window if window else None
        return await self.api_log_repo.stats(project_id=project_id, since=since)

    async def get_project_stats(
        self, project_id: str, time_range: str | None = None
    ) -> dict[str, Any]:
        stats = await self.get_stats(time_range, project_id=project_id)
        if stats["total_requests"] == 0:
            raise NotFoundError(f"No API usage data found for project {project_id}")
        return stats

    async def list_logs(
        self,
        page: int,
        limit: int,
        project_id: str | None = None,
        method: str | None = None,
        status: str | None = None,
        search: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> tuple[list[ApiLog], dict[str, Any]]:
        """Page through logs.

        Returns:
            Tuple of (logs, pagination)
        """
        start_date, end_date = _naive_utc(start_date), _naive_utc(end_date)
        if start_date and end_date and start_date > end_date:
            raise ValidationError("startDate must be before endDate")
        logs, total = await self.api_log_repo.search(
            page=page,
            limit=limit,
            project_id=project_id,
            method=method,
            status=status,
            search=search,
            start_date=start_date,
            end_date=end_date,
        )
        total_pages = (total + limit - 1) // limit
        pagination = {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": total_pages,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        }
        return logs, pagination

    async def health(self, uptime_seconds: float) -> dict[str, Any]:
        recent = await self.api_log_repo.stats(since=utc_now() - timedelta(hours=1))
        return {
            "status": "healthy",
            "uptime": int(uptime_seconds),
            "log_stats": {
                "recent_requests": recent["total_requests"],
                "recent_errors": recent["error_rate"]["errors"],
                "avg_response_time": recent["avg_response_time"],
            },
            "total_logs": await self.api_log_repo.count_all(),
            "last_log_at": await self.api_log_repo.latest_timestamp(),
            "log_stream_subscribers": self.broadcaster.subscriber_count,
            "timestamp": utc_now(),
        }
