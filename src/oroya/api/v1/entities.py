"""Entity endpoints.

Entities are reachable both nested under their project and directly by id.
The nested routes also check that the entity belongs to the project.
"""

from uuid import UUID

from fastapi import APIRouter, status

from src.oroya.api.dependencies import EntityServiceDep
from src.oroya.schemas import EntityCreate, EntityRead, EntityUpdate, MessageResponse

router = APIRouter(tags=["entities"])

_NOT_FOUND = {404: {"description": "Project or entity not found"}}


@router.get(
    "/projects/{project_id}/entities",
    response_model=list[EntityRead],
    summary="List entities of a project",
    responses={404: {"description": "Project not found"}},
)
async def list_entities(project_id: UUID, service: EntityServiceDep) -> list[EntityRead]:
    entities = await service.list_entities(project_id)
    return [EntityRead.model_validate(e) for e in entities]


@router.post(
    "/projects/{project_id}/entities",
    response_model=EntityRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create entity in a project",
    responses={
        400: {"description": "Invalid name or an entity with this name already exists"},
        404: {"description": "Project not found"},
    },
)
async def create_project_entity(
    project_id: UUID, body: EntityCreate, service: EntityServiceDep
) -> EntityRead:
    entity = await service.create_entity(body, project_id=project_id)
    return EntityRead.model_validate(entity)


@router.post(
    "/entities",
    response_model=EntityRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create entity",
    description="Create an entity. `projectId` is required in the body.",
    responses={
        400: {"description": "Invalid name, missing projectId, or duplicate"},
        404: {"description": "Project not found"},
    },
)
async def create_entity(body: EntityCreate, service: EntityServiceDep) -> EntityRead:
    entity = await service.create_entity(body)
    return EntityRead.model_validate(entity)


@router.get(
    "/entities/{entity_id}",
    response_model=EntityRead,
    summary="Get entity",
    responses={404: {"description": "Entity not found"}},
)
async def get_entity(entity_id: UUID, service: EntityServiceDep) -> EntityRead:
    entity = await service.get_entity(entity_id)
    return EntityRead.model_validate(entity)


@router.get(
    "/projects/{project_id}/entities/{entity_id}",
    response_model=EntityRead,
    summary="Get entity of a project",
    responses=_NOT_FOUND,
)
async def get_project_entity(
    project_id: UUID, entity_id: UUID, service: EntityServiceDep
) -> EntityRead:
    entity = await service.get_entity(entity_id, project_id=project_id)
    return EntityRead.model_validate(entity)


@router.put(
    "/projects/{project_id}/entities/{entity_id}",
    response_model=EntityRead,
    summary="Update entity of a project",
    responses=_NOT_FOUND,
)
async def update_project_entity(
    project_id: UUID, entity_id: UUID, body: EntityUpdate, service: EntityServiceDep
) -> EntityRead:
    entity = await service.update_entity(entity_id, body, project_id=project_id)
    return EntityRead.model_validate(entity)


@router.patch(
    "/entities/{entity_id}",
    response_model=EntityRead,
    summary="Update entity",
    responses={404: {"description": "Entity not found"}},
)
async def update_entity(
    entity_id: UUID, body: EntityUpdate, service: EntityServiceDep
) -> EntityRead:
    entity = await service.update_entity(entity_id, body)
    return EntityRead.model_validate(entity)


@router.delete(
    "/projects/{project_id}/entities/{entity_id}",
    response_model=MessageResponse,
    summary="Delete entity of a project",
    responses=_NOT_FOUND,
)
async def delete_project_entity(
    project_id: UUID, entity_id: UUID, service: EntityServiceDep
) -> MessageResponse:
    await service.delete_entity(entity_id, project_id=project_id)
    return MessageResponse(message="Entity deleted successfully")


@router.delete(
    "/entities/{entity_id}",
    response_model=MessageResponse,
    summary="Delete entity",
    description="Delete an entity with its fields and every relationship touching it.",
    responses={404: {"description": "Entity not found"}},
)
async def delete_entity(entity_id: UUID, service: EntityServiceDep) -> MessageResponse:
    await service.delete_entity(entity_id)
    return MessageResponse(message="Entity deleted successfully")
