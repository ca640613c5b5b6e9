"""Request log analytics endpoints."""

import time
from datetime import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Query, Request

from src.oroya.api.dependencies import AnalyticsServiceDep
from src.oroya.models.base import utc_now
from src.oroya.schemas import (
    AnalyticsHealth,
    ApiLogRead,
    ApiStats,
    LogFilters,
    LogsResponse,
    Pagination,
    StatsMetadata,
    StatsResponse,
)
from src.oroya.services.analytics_service import ALL_TIME

router = APIRouter(prefix="/analytics", tags=["analytics"])

TimeRange = Annotated[
    str | None,
    Query(
        alias="timeRange",
        description="Window such as '1 hour', '24 hours' or '7 days'. Omit for all time.",
    ),
]


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="API usage statistics",
    responses={400: {"description": "Invalid timeRange"}},
)
async def get_stats(
    service: AnalyticsServiceDep, time_range: TimeRange = None
) -> StatsResponse:
    stats = await service.get_stats(time_range)
    return StatsResponse(
        data=ApiStats.model_validate(stats),
        metadata=StatsMetadata(generated_at=utc_now(), time_range=time_range or ALL_TIME),
    )


@router.get(
    "/projects/{project_id}/stats",
    response_model=StatsResponse,
    summary="API usage statistics of a project",
    responses={
        400: {"description": "Invalid timeRange"},
        404: {"description": "No API usage data found for the project"},
    },
)
async def get_project_stats(
    project_id: str, service: AnalyticsServiceDep, time_range: TimeRange = None
) -> StatsResponse:
    stats = await service.get_project_stats(project_id, time_range)
    return StatsResponse(
        data=ApiStats.model_validate(stats),
        metadata=StatsMetadata(
            generated_at=utc_now(),
            time_range=time_range or ALL_TIME,
            project_id=project_id,
        ),
    )


@router.get(
    "/logs",
    response_model=LogsResponse,
    summary="Search request logs",
    description="Paginated request logs, newest first.",
)
async def list_logs(
    service: AnalyticsServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=1000)] = 50,
    project_id: Annotated[str | None, Query(alias="projectId")] = None,
    method: Annotated[str | None, Query(max_length=10)] = None,
    status: Annotated[
        Literal["1xx", "2xx", "3xx", "4xx", "5xx"] | None,
        Query(description="Status class"),
    ] = None,
    search: Annotated[
        str | None, Query(max_length=200, description="Substring of the URL")
    ] = None,
    start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
    end_date: Annotated[datetime | None, Query(alias="endDate")] = None,
) -> LogsResponse:
    logs, pagination = await service.list_logs(
        page=page,
        limit=limit,
        project_id=project_id,
        method=method.upper() if method else None,
        status=status,
        search=search,
        start_date=start_date,
        end_date=end_date,
    )
    return LogsResponse(
        logs=[ApiLogRead.model_validate(log) for log in logs],
        pagination=Pagination.model_validate(pagination),
        filters=LogFilters(
            project_id=project_id,
            method=method,
            status=status,
            search=search,
            start_date=start_date,
            end_date=end_date,
        ),
    )


@router.get(
    "/health",
    response_model=AnalyticsHealth,
    summary="Analytics health",
    description="Traffic over the last hour and live stream subscribers.",
)
async def analytics_health(request: Request, service: AnalyticsServiceDep) -> AnalyticsHealth:
    uptime = time.monotonic() - request.app.state.started_at
    return AnalyticsHealth.model_validate(await service.health(uptime))
