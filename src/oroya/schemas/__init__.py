"""API request/response schemas."""

from src.oroya.schemas.analytics import (
    AnalyticsHealth,
    ApiLogRead,
    ApiStats,
    LogFilters,
    LogsResponse,
    Pagination,
    RecentLogStats,
    StatsMetadata,
    StatsResponse,
)
from src.oroya.schemas.base import CamelModel, MessageResponse, PatchModel
from src.oroya.schemas.entity import EntityCreate, EntityRead, EntityUpdate
from src.oroya.schemas.field import FieldCreate, FieldRead, FieldUpdate
from src.oroya.schemas.file import (
    Base64Upload,
    Base64UploadResponse,
    FieldFileAttach,
    FieldFileRead,
    FieldFilesResponse,
    FileBase64Response,
    FileRead,
    FileRename,
    FileUploadResponse,
    StorageStats,
)
from src.oroya.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.oroya.schemas.relationship import (
    RelationshipCreate,
    RelationshipDetail,
    RelationshipExists,
    RelationshipRead,
    RelationshipUpdate,
)

__all__ = [
    "AnalyticsHealth",
    "ApiLogRead",
    "ApiStats",
    "Base64Upload",
    "Base64UploadResponse",
    "CamelModel",
    "EntityCreate",
    "EntityRead",
    "EntityUpdate",
    "FieldCreate",
    "FieldFileAttach",
    "FieldFileRead",
    "FieldFilesResponse",
    "FieldRead",
    "FieldUpdate",
    "FileBase64Response",
    "FileRead",
    "FileRename",
    "FileUploadResponse",
    "LogFilters",
    "LogsResponse",
    "MessageResponse",
    "Pagination",
    "PatchModel",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "RecentLogStats",
    "RelationshipCreate",
    "RelationshipDetail",
    "RelationshipExists",
    "RelationshipRead",
    "RelationshipUpdate",
    "StatsMetadata",
    "StatsResponse",
    "StorageStats",
]
