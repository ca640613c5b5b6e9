"""Request log and analytics schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from src.oroya.schemas.base import CamelModel


class ApiLogRead(CamelModel):
    """A recorded API request."""

    id: UUID
    timestamp: datetime
    method: str
    url: str
    status_code: int
    response_time: float
    ip_address: str | None
    user_agent: str | None
    project_id: str | None
    entity_type: str | None
    entity_id: str | None
    request_size: int | None
    response_size: int | None
    error_message: str | None
    query_params: dict[str, Any] | None
    headers: dict[str, Any] | None
    referrer: str | None
    request_id: str | None


class CountBucket(CamelModel):
    key: str
    count: int


class EndpointStat(CamelModel):
    url: str
    method: str
    count: int
    avg_response_time: float


class ErrorRate(CamelModel):
    errors: int
    total: int
    error_rate: float


class HourlyTraffic(CamelModel):
    hour: str
    count: int


class IpStat(CamelModel):
    ip_address: str
    count: int


class ApiStats(CamelModel):
    total_requests: int
    requests_by_method: list[CountBucket]
    requests_by_status: list[CountBucket]
    avg_response_time: float
    top_endpoints: list[EndpointStat]
    error_rate: ErrorRate
    hourly_traffic: list[HourlyTraffic]
    top_ips: list[IpStat]


class StatsMetadata(CamelModel):
    generated_at: datetime
    time_range: str
    timezone: str = "UTC"
    project_id: str | None = None


class StatsResponse(CamelModel):
    success: bool = True
    data: ApiStats
    metadata: StatsMetadata


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class LogFilters(CamelModel):
    """Filters applied to the log listing."""

    project_id: str | None = None
    method: str | None = None
    status: str | None = None
    search: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class LogsResponse(CamelModel):
    success: bool = True
    logs: list[ApiLogRead]
    pagination: Pagination
    filters: LogFilters


class RecentLogStats(CamelModel):
    recent_requests: int
    recent_errors: int
    avg_response_time: float


class AnalyticsHealth(CamelModel):
    status: str
    uptime: int  # seconds
    log_stats: RecentLogStats
    total_logs: int
    last_log_at: datetime | None
    log_stream_subscribers: int
    timestamp: datetime
