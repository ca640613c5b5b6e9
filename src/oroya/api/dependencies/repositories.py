"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.oroya.api.dependencies.db import DBSession
from src.oroya.repositories import (
    ApiLogRepository,
    EntityRepository,
    FieldRepository,
    FileRepository,
    ProjectRepository,
    RelationshipRepository,
)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_entity_repository(session: DBSession) -> EntityRepository:
    return EntityRepository(session)


def get_field_repository(session: DBSession) -> FieldRepository:
    return FieldRepository(session)


def get_relationship_repository(session: DBSession) -> RelationshipRepository:
    return RelationshipRepository(session)


def get_file_repository(session: DBSession) -> FileRepository:
    return FileRepository(session)


def get_api_log_repository(session: DBSession) -> ApiLogRepository:
    return ApiLogRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
EntityRepo = Annotated[EntityRepository, Depends(get_entity_repository)]
FieldRepo = Annotated[FieldRepository, Depends(get_field_repository)]
RelationshipRepo = Annotated[RelationshipRepository, Depends(get_relationship_repository)]
FileRepo = Annotated[FileRepository, Depends(get_file_repository)]
ApiLogRepo = Annotated[ApiLogRepository, Depends(get_api_log_repository)]
