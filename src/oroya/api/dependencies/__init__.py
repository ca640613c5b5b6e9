"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenient imports.
"""

# Database
from src.oroya.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.oroya.api.dependencies.repositories import (
    ApiLogRepo,
    EntityRepo,
    FieldRepo,
    FileRepo,
    ProjectRepo,
    RelationshipRepo,
)

# Services
from src.oroya.api.dependencies.services import (
    AnalyticsServiceDep,
    EntityServiceDep,
    FieldServiceDep,
    FileServiceDep,
    ProjectServiceDep,
    RelationshipServiceDep,
    get_file_storage,
    get_log_broadcaster,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ApiLogRepo",
    "EntityRepo",
    "FieldRepo",
    "FileRepo",
    "ProjectRepo",
    "RelationshipRepo",
    # Services
    "AnalyticsServiceDep",
    "EntityServiceDep",
    "FieldServiceDep",
    "FileServiceDep",
    "ProjectServiceDep",
    "RelationshipServiceDep",
    "get_file_storage",
    "get_log_broadcaster",
]
