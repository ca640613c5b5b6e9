"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from src.oroya.api.dependencies.db import DBSession
from src.oroya.api.dependencies.repositories import (
    ApiLogRepo,
    EntityRepo,
    FieldRepo,
    FileRepo,
    ProjectRepo,
    RelationshipRepo,
)
from src.oroya.core.config import get_settings
from src.oroya.services.analytics_service import AnalyticsService
from src.oroya.services.entity_service import EntityService
from src.oroya.services.field_service import FieldService
from src.oroya.services.file_service import FileService
from src.oroya.services.file_storage import FileStorage
from src.oroya.services.log_stream import LogBroadcaster
from src.oroya.services.project_service import ProjectService
from src.oroya.services.relationship_service import RelationshipService


def get_project_service(
    project_repo: ProjectRepo, field_repo: FieldRepo, session: DBSession
) -> ProjectService:
    return ProjectService(project_repo, field_repo, session)


def get_entity_service(
    entity_repo: EntityRepo,
    project_repo: ProjectRepo,
    field_repo: FieldRepo,
    session: DBSession,
) -> EntityService:
    return EntityService(entity_repo, project_repo, field_repo, session)


def get_field_service(
    field_repo: FieldRepo, entity_repo: EntityRepo, session: DBSession
) -> FieldService:
    return FieldService(field_repo, entity_repo, session)


def get_relationship_service(
    relationship_repo: RelationshipRepo,
    entity_repo: EntityRepo,
    field_repo: FieldRepo,
    session: DBSession,
) -> RelationshipService:
    return RelationshipService(relationship_repo, entity_repo, field_repo, session)


def get_file_storage() -> FileStorage:
    return FileStorage(get_settings())


def get_file_service(
    file_repo: FileRepo,
    field_repo: FieldRepo,
    storage: Annotated[FileStorage, Depends(get_file_storage)],
    session: DBSession,
) -> FileService:
    return FileService(file_repo, field_repo, storage, session, get_settings())


def get_log_broadcaster(request: Request) -> LogBroadcaster:
    """The app-owned broadcaster created in `create_app`."""
    return request.app.state.log_broadcaster


def get_analytics_service(
    api_log_repo: ApiLogRepo,
    broadcaster: Annotated[LogBroadcaster, Depends(get_log_broadcaster)],
) -> AnalyticsService:
    return AnalyticsService(api_log_repo, broadcaster)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
EntityServiceDep = Annotated[EntityService, Depends(get_entity_service)]
FieldServiceDep = Annotated[FieldService, Depends(get_field_service)]
RelationshipServiceDep = Annotated[RelationshipService, Depends(get_relationship_service)]
FileServiceDep = Annotated[FileService, Depends(get_file_service)]
AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]
