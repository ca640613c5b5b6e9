import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.oroya.api.middlewares import setup_middlewares
from src.oroya.api.v1 import logs_stream
from src.oroya.api.v1.router import api_router
from src.oroya.core.config import get_settings
from src.oroya.core.db import dispose_engine, get_session, run_migrations_async
from src.oroya.core.exceptions import setup_exception_handlers
from src.oroya.core.logging import get_logger, setup_logging
from src.oroya.services.file_storage import FileStorage
from src.oroya.services.log_stream import LogBroadcaster
from src.oroya.services.request_log_service import RequestLogService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", env=settings.app_env)

    if settings.auto_migrate:
        logger.info("Running database migrations...")
        await run_migrations_async(settings.database_url)

    FileStorage(settings).ensure_dirs()

    yield

    logger.info("Closing connections...")
    app.state.log_broadcaster.close_all()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Projects group entities"},
    {"name": "entities", "description": "Table-like schemas inside a project"},
    {"name": "fields", "description": "Typed fields of an entity"},
    {"name": "relationships", "description": "Relationships between entities"},
    {"name": "files", "description": "Uploads and their association with records"},
    {"name": "analytics", "description": "Request logs and usage statistics"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Schema builder API: projects, entities, fields, relationships and files",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    app.state.started_at = time.monotonic()
    app.state.log_broadcaster = LogBroadcaster(settings.log_stream_queue_size)
    app.state.request_log_service = RequestLogService(app.state.log_broadcaster)
    app.state.health_cache = None
    app.state.health_cache_time = 0.0

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)
    app.include_router(logs_stream.router)

    @app.get("/health", tags=["health"])
    async def health() -> JSONResponse:
        """Health check with database validation and caching."""
        now = time.time()

        cached: dict[str, Any] | None = app.state.health_cache
        cache_age = now - app.state.health_cache_time
        if cached and cache_age < settings.health_cache_ttl:
            cached_response = cached.copy()
            cached_response["cached"] = True
            cached_response["cache_age_seconds"] = round(cache_age, 1)
            status_code = 200 if cached_response["status"] == "healthy" else 503
            return JSONResponse(content=cached_response, status_code=status_code)

        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "cached": False,
            "timestamp": now,
        }

        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except Exception as e:
            logger.warning("Health check database failure", error=str(e))
            health_status["database"] = f"unhealthy: {str(e)}"
            health_status["status"] = "unhealthy"

        app.state.health_cache = health_status
        app.state.health_cache_time = now

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
