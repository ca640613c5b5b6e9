"""Domain errors and exception handlers with request_id in responses."""

from http import HTTPStatus
from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.oroya.core.config import get_settings
from src.oroya.core.logging import get_logger

logger = get_logger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


class OroyaError(Exception):
    """Base class for errors surfaced to API clients as `{error, message}`."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OroyaError):
    """Malformed or missing input."""

    status_code = 400
    error = "Validation Error"


class NotFoundError(OroyaError):
    """Missing parent or target resource."""

    status_code = 404
    error = "Not Found"

    @classmethod
    def for_resource(cls, kind: str, id: Any) -> "NotFoundError":
        return cls(f"{kind} {id} not found")


class ConflictError(OroyaError):
    """Duplicate name within scope, or duplicate relationship edge."""

    status_code = 400
    error = "Conflict"


class UploadError(OroyaError):
    """File rejected by type, size or count limits."""

    status_code = 400
    error = "Upload Error"


class InternalError(OroyaError):
    """Unexpected failure. The message is only shown in development."""

    status_code = 500
    error = "Internal Server Error"


def error_body(error: str, message: str) -> dict[str, Any]:
    return {
        "error": error,
        "message": message,
        "request_id": correlation_id.get(),
    }


def first_validation_message(exc: RequestValidationError) -> str:
    """Flatten the first pydantic error into a single readable message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = str(first.get("msg", "Invalid value"))
    if msg.startswith(VALUE_ERROR_PREFIX):
        return msg[len(VALUE_ERROR_PREFIX) :]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if loc:
        return f"{'.'.join(loc)}: {msg}"
    return msg


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(OroyaError)
    async def oroya_exception_handler(request: Request, exc: OroyaError) -> JSONResponse:
        message = exc.message
        if isinstance(exc, InternalError) and not get_settings().is_development:
            message = "Internal server error"
        request.state.error_message = exc.message
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.error, message),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = first_validation_message(exc)
        request.state.error_message = message
        return JSONResponse(
            status_code=ValidationError.status_code,
            content=error_body(ValidationError.error, message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        request.state.error_message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(HTTPStatus(exc.status_code).phrase, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        message = str(exc) if get_settings().is_development else "Internal server error"
        return JSONResponse(
            status_code=500,
            content=error_body(InternalError.error, message),
        )
