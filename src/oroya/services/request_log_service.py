"""Request log recording - persists each API call and feeds the live stream."""

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Final

from src.oroya.core.db import get_session
from src.oroya.core.logging import get_logger
from src.oroya.models import ApiLog, LogLevel
from src.oroya.repositories import ApiLogRepository
from src.oroya.schemas.analytics import ApiLogRead
from src.oroya.services.log_stream import LogBroadcaster

logger = get_logger(__name__)

_PROJECT_PATH: Final[re.Pattern[str]] = re.compile(r"/api/projects/([^/?]+)")
_ENTITY_PATH: Final[re.Pattern[str]] = re.compile(r"/api/entities/([^/?]+)")

HIDDEN: Final[str] = "[HIDDEN]"
RECORDED_HEADERS: Final[tuple[str, ...]] = (
    "content-type",
    "accept",
    "x-forwarded-for",
    "x-real-ip",
)
SECRET_HEADERS: Final[tuple[str, ...]] = ("authorization", "cookie")


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Keep a few diagnostic headers; mask credentials."""
    lowered = {k.lower(): v for k, v in headers.items()}
    result = {name: lowered[name] for name in RECORDED_HEADERS if name in lowered}
    for name in SECRET_HEADERS:
        if name in lowered:
            result[name] = HIDDEN
    return result


def extract_resource(path: str) -> tuple[str | None, str | None, str | None]:
    """Pull project and entity ids out of a request path.

    Returns:
        Tuple of (project_id, entity_type, entity_id)
    """
    project_id = entity_type = entity_id = None
    if match := _PROJECT_PATH.search(path):
        project_id = match.group(1)
    if match := _ENTITY_PATH.search(path):
        entity_type = "entity"
        entity_id = match.group(1)
    return project_id, entity_type, entity_id


def client_ip(headers: Mapping[str, str], fallback: str | None) -> str | None:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or fallback
    return headers.get("x-real-ip") or fallback


class RequestLogService:
    """Records API requests.

    Fire-and-forget: uses its own session so a failure to record never
    affects the request being logged, and never raises.
    """

    def __init__(self, broadcaster: LogBroadcaster):
        self.broadcaster = broadcaster

    async def record(
        self,
        *,
        timestamp: datetime,
        method: str,
        url: str,
        path: str,
        status_code: int,
        response_time: float,
        headers: Mapping[str, str],
        peer_ip: str | None,
        query_params: Mapping[str, Any],
        request_size: int | None,
        response_size: int | None,
        error_message: str | None,
        request_id: str | None,
    ) -> ApiLog | None:
        project_id, entity_type, entity_id = extract_resource(path)
        log = ApiLog(
            timestamp=timestamp,
            method=method,
            url=url,
            status_code=status_code,
            response_time=round(response_time, 2),
            ip_address=client_ip(headers, peer_ip),
            user_agent=(headers.get("user-agent") or "")[:500] or None,
            project_id=project_id,
            entity_type=entity_type,
            entity_id=entity_id,
            request_size=request_size,
            response_size=response_size,
            error_message=error_message[:1000] if error_message else None,
            query_params=dict(query_params),
            headers=sanitize_headers(headers),
            referrer=headers.get("referer"),
            request_id=request_id,
        )

        level = LogLevel.for_status(status_code)
        log_method = {
            LogLevel.INFO: logger.info,
            LogLevel.WARN: logger.warning,
            LogLevel.ERROR: logger.error,
        }[level]
        log_method(
            "request_completed",
            method=method,
            url=url,
            status_code=status_code,
            response_time_ms=log.response_time,
            ip=log.ip_address,
        )

        try:
            async with get_session() as session:
                ApiLogRepository(session).add(log)
                await session.commit()
        except Exception as e:
            # Fire-and-forget: log the failure but don't propagate
            logger.warning("Failed to record API log", url=url, error=str(e))
            return None

        self.broadcaster.publish(ApiLogRead.model_validate(log))
        return log
