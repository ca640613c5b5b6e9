"""Request logging middleware - records every /api call to api_logs."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.oroya.models.base import utc_now
from src.oroya.services.request_log_service import RequestLogService

LOGGED_PREFIX = "/api"


def _int_header(value: str | None) -> int | None:
    if value is None or not value.isdigit():
        return None
    return int(value)


async def request_logging_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Time the request and record it once the response is ready."""
    if not request.url.path.startswith(LOGGED_PREFIX):
        return await call_next(request)

    recorder: RequestLogService = request.app.state.request_log_service
    timestamp = utc_now()
    start = time.perf_counter()
    url = request.url.path + (f"?{request.url.query}" if request.url.query else "")

    async def record(status_code: int, response_size: int | None, error: str | None) -> None:
        await recorder.record(
            timestamp=timestamp,
            method=request.method,
            url=url,
            path=request.url.path,
            status_code=status_code,
            response_time=(time.perf_counter() - start) * 1000,
            headers=request.headers,
            peer_ip=request.client.host if request.client else None,
            query_params=dict(request.query_params),
            request_size=_int_header(request.headers.get("content-length")),
            response_size=response_size,
            error_message=error,
            request_id=correlation_id.get(),
        )

    try:
        response = await call_next(request)
    except Exception as exc:
        await record(500, None, str(exc) or exc.__class__.__name__)
        raise

    error = getattr(request.state, "error_message", None) if response.status_code >= 400 else None
    await record(
        response.status_code,
        _int_header(response.headers.get("content-length")),
        error,
    )
    return response
