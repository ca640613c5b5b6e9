"""API request log model."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Column, Index
from sqlmodel import Field, SQLModel

from src.oroya.models.base import new_id, utc_now


class ApiLog(SQLModel, table=True):
    """One row per handled /api request."""

    __tablename__ = "api_logs"
    __table_args__ = (
        Index("ix_api_logs_timestamp", "timestamp"),
        Index("ix_api_logs_project_timestamp", "project_id", "timestamp"),
        Index("ix_api_logs_status_code", "status_code"),
    )

    id: UUID = Field(default_factory=new_id, primary_key=True)
    timestamp: datetime = Field(default_factory=utc_now)
    method: str = Field(max_length=10)
    url: str
    status_code: int
    response_time: float  # milliseconds
    ip_address: str | None = Field(default=None, max_length=45)
    user_agent: str | None = Field(default=None, max_length=500)

    # Resource context parsed from the path
    project_id: str | None = Field(default=None, max_length=36)
    entity_type: str | None = Field(default=None, max_length=50)
    entity_id: str | None = Field(default=None, max_length=36)

    request_size: int | None = Field(default=None)
    response_size: int | None = Field(default=None)
    error_message: str | None = Field(default=None, max_length=1000)
    query_params: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    headers: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    referrer: str | None = Field(default=None, max_length=500)
    request_id: str | None = Field(default=None, max_length=36)
