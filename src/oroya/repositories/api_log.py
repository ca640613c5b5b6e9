"""Repository for recorded API requests and their aggregates."""

from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, case, func, or_, select

from src.oroya.models import ApiLog
from src.oroya.repositories.base import BaseRepository

TOP_LIMIT = 10


def status_class_bounds(status: str) -> tuple[int, int]:
    """Map "2xx".."5xx" to an inclusive status code range."""
    first = int(status[0])
    return first * 100, first * 100 + 99


class ApiLogRepository(BaseRepository[ApiLog]):
    """Repository for ApiLog rows."""

    model = ApiLog

    async def search(
        self,
        page: int = 1,
        limit: int = 50,
        project_id: str | None = None,
        method: str | None = None,
        status: str | None = None,
        search: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> tuple[list[ApiLog], int]:
        """Filter logs, newest first, one page at a time.

        Returns:
            Tuple of (logs on this page, total matching rows)
        """
        conditions: list[ColumnElement[bool]] = []
        if project_id:
            conditions.append(ApiLog.project_id == project_id)
        if method:
            conditions.append(ApiLog.method == method.upper())
        if status:
            low, high = status_class_bounds(status)
            conditions.append(ApiLog.status_code.between(low, high))  # type: ignore[attr-defined]
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    ApiLog.url.like(pattern),  # type: ignore[attr-defined]
                    ApiLog.error_message.like(pattern),  # type: ignore[union-attr]
                )
            )
        if start_date:
            conditions.append(ApiLog.timestamp >= start_date)
        if end_date:
            conditions.append(ApiLog.timestamp <= end_date)

        total = await self.session.scalar(select(func.count(ApiLog.id)).where(*conditions))
        result = await self.session.execute(
            select(ApiLog)
            .where(*conditions)
            .order_by(ApiLog.timestamp.desc())  # type: ignore[attr-defined]
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), int(total or 0)

    async def count_all(self) -> int:
        return int(await self.session.scalar(select(func.count(ApiLog.id))) or 0)

    async def latest_timestamp(self) -> datetime | None:
        return await self.session.scalar(select(func.max(ApiLog.timestamp)))

    async def stats(
        self,
        project_id: str | None = None,
        since: datetime | None = None,
    ) -> dict[str, Any]:
        """Aggregate request statistics, optionally per project and time window."""
        conditions: list[ColumnElement[bool]] = []
        if project_id:
            conditions.append(ApiLog.project_id == project_id)
        if since:
            conditions.append(ApiLog.timestamp >= since)

        total = int(await self.session.scalar(select(func.count(ApiLog.id)).where(*conditions)) or 0)

        count_col = func.count(ApiLog.id).label("count")

        by_method = await self.session.execute(
            select(ApiLog.method, count_col)
            .where(*conditions)
            .group_by(ApiLog.method)
            .order_by(count_col.desc())
        )
        by_status = await self.session.execute(
            select(ApiLog.status_code, count_col)
            .where(*conditions)
            .group_by(ApiLog.status_code)
            .order_by(count_col.desc())
        )
        avg_time = await self.session.scalar(
            select(func.avg(ApiLog.response_time)).where(*conditions)
        )
        top_endpoints = await self.session.execute(
            select(
                ApiLog.url,
                ApiLog.method,
                count_col,
                func.avg(ApiLog.response_time).label("avg_response_time"),
            )
            .where(*conditions)
            .group_by(ApiLog.url, ApiLog.method)
            .order_by(count_col.desc())
            .limit(TOP_LIMIT)
        )
        errors = await self.session.scalar(
            select(
                func.coalesce(func.sum(case((ApiLog.status_code >= 400, 1), else_=0)), 0)
            ).where(*conditions)
        )
        hour = func.strftime("%H", ApiLog.timestamp).label("hour")
        hourly = await self.session.execute(
            select(hour, count_col).where(*conditions).group_by(hour).order_by(hour)
        )
        top_ips = await self.session.execute(
            select(ApiLog.ip_address, count_col)
            .where(*conditions, ApiLog.ip_address.is_not(None))  # type: ignore[union-attr]
            .group_by(ApiLog.ip_address)
            .order_by(count_col.desc())
            .limit(TOP_LIMIT)
        )

        error_count = int(errors or 0)
        return {
            "total_requests": total,
            "requests_by_method": [
                {"key": method, "count": count} for method, count in by_method.all()
            ],
            "requests_by_status": [
                {"key": str(status_code), "count": count}
                for status_code, count in by_status.all()
            ],
            "avg_response_time": round(float(avg_time or 0), 2),
            "top_endpoints": [
                {
                    "url": url,
                    "method": method,
                    "count": count,
                    "avg_response_time": round(float(avg or 0), 2),
                }
                for url, method, count, avg in top_endpoints.all()
            ],
            "error_rate": {
                "errors": error_count,
                "total": total,
                "error_rate": round(error_count * 100 / total, 2) if total else 0.0,
            },
            "hourly_traffic": [{"hour": h, "count": count} for h, count in hourly.all()],
            "top_ips": [{"ip_address": ip, "count": count} for ip, count in top_ips.all()],
        }
