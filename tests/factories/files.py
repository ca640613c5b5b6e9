"""Factories for stored files and request logs."""

from polyfactory import Use

from src.oroya.models import ApiLog, FileRecord
from src.oroya.models.base import new_id, utc_now
from tests.factories.base import BaseFactory


def _filename() -> str:
    return f"{new_id()}.pdf"


class FileRecordFactory(BaseFactory):
    """Factory for file rows. No bytes are written to storage."""

    __model__ = FileRecord

    original_name = "report.pdf"
    filename = Use(_filename)
    mimetype = "application/pdf"
    size = 1024
    path = Use(lambda: f"uploads/{_filename()}")
    is_image = False
    width = None
    height = None
    compressed_path = None
    thumbnail_path = None
    updated_at = Use(utc_now)


class ApiLogFactory(BaseFactory):
    """Factory for request log rows."""

    __model__ = ApiLog

    timestamp = Use(utc_now)
    method = "GET"
    url = "/api/projects"
    status_code = 200
    response_time = 12.5
    ip_address = "127.0.0.1"
    user_agent = "pytest"
    project_id = None
    entity_type = None
    entity_id = None
    request_size = None
    response_size = None
    error_message = None
    query_params = Use(dict)
    headers = Use(dict)
    referrer = None
    request_id = None

    @classmethod
    def failed(cls, status_code: int = 500, **kwargs):
        """Create a log for a failed request."""
        return cls.build(status_code=status_code, error_message="boom", **kwargs)
