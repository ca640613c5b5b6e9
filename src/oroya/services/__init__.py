from src.oroya.services.analytics_service import AnalyticsService
from src.oroya.services.entity_service import EntityService
from src.oroya.services.field_service import FieldService
from src.oroya.services.file_service import FileService
from src.oroya.services.file_storage import FileStorage
from src.oroya.services.log_stream import LogBroadcaster, LogStreamFilter, Subscription
from src.oroya.services.project_service import ProjectService
from src.oroya.services.relationship_service import RelationshipService
from src.oroya.services.request_log_service import RequestLogService

__all__ = [
    "AnalyticsService",
    "EntityService",
    "FieldService",
    "FileService",
    "FileStorage",
    "LogBroadcaster",
    "LogStreamFilter",
    "ProjectService",
    "RelationshipService",
    "RequestLogService",
    "Subscription",
]
