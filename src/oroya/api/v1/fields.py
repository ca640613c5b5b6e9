"""Field endpoints, nested under an entity or addressed directly."""

from uuid import UUID

from fastapi import APIRouter, status

from src.oroya.api.dependencies import FieldServiceDep
from src.oroya.schemas import FieldCreate, FieldRead, FieldUpdate

router = APIRouter(tags=["fields"])

_NESTED = "/projects/{project_id}/entities/{entity_id}/fields"


@router.get(
    "/entities/{entity_id}/fields",
    response_model=list[FieldRead],
    summary="List fields of an entity",
    description="Fields in creation order.",
    responses={404: {"description": "Entity not found"}},
)
async def list_fields(entity_id: UUID, service: FieldServiceDep) -> list[FieldRead]:
    fields = await service.list_fields(entity_id)
    return [FieldRead.model_validate(f) for f in fields]


@router.get(
    _NESTED,
    response_model=list[FieldRead],
    summary="List fields of a project entity",
    responses={404: {"description": "Project or entity not found"}},
)
async def list_project_entity_fields(
    project_id: UUID, entity_id: UUID, service: FieldServiceDep
) -> list[FieldRead]:
    fields = await service.list_fields(entity_id, project_id=project_id)
    return [FieldRead.model_validate(f) for f in fields]


@router.post(
    "/entities/{entity_id}/fields",
    response_model=FieldRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create field",
    responses={
        400: {"description": "Invalid name, reserved word, duplicate or bad file limits"},
        404: {"description": "Entity or referenced field not found"},
    },
)
async def create_field(
    entity_id: UUID, body: FieldCreate, service: FieldServiceDep
) -> FieldRead:
    field = await service.create_field(entity_id, body)
    return FieldRead.model_validate(field)


@router.post(
    _NESTED,
    response_model=FieldRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create field in a project entity",
    responses={
        400: {"description": "Invalid name, reserved word, duplicate or bad file limits"},
        404: {"description": "Project, entity or referenced field not found"},
    },
)
async def create_project_entity_field(
    project_id: UUID, entity_id: UUID, body: FieldCreate, service: FieldServiceDep
) -> FieldRead:
    field = await service.create_field(entity_id, body, project_id=project_id)
    return FieldRead.model_validate(field)


@router.get(
    "/fields/{field_id}",
    response_model=FieldRead,
    summary="Get field",
    responses={404: {"description": "Field not found"}},
)
async def get_field(field_id: UUID, service: FieldServiceDep) -> FieldRead:
    field = await service.get_field(field_id)
    return FieldRead.model_validate(field)


@router.put(
    "/fields/{field_id}",
    response_model=FieldRead,
    summary="Update field",
    responses={404: {"description": "Field not found"}},
)
@router.patch(
    "/fields/{field_id}",
    response_model=FieldRead,
    summary="Update field",
    responses={404: {"description": "Field not found"}},
)
async def update_field(
    field_id: UUID, body: FieldUpdate, service: FieldServiceDep
) -> FieldRead:
    field = await service.update_field(field_id, body)
    return FieldRead.model_validate(field)


@router.put(
    _NESTED + "/{field_id}",
    response_model=FieldRead,
    summary="Update field of a project entity",
    responses={404: {"description": "Project, entity or field not found"}},
)
async def update_project_entity_field(
    project_id: UUID,
    entity_id: UUID,
    field_id: UUID,
    body: FieldUpdate,
    service: FieldServiceDep,
) -> FieldRead:
    field = await service.update_field(
        field_id, body, entity_id=entity_id, project_id=project_id
    )
    return FieldRead.model_validate(field)


@router.delete(
    "/fields/{field_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete field",
    responses={
        204: {"description": "Field deleted"},
        404: {"description": "Field not found"},
    },
)
async def delete_field(field_id: UUID, service: FieldServiceDep) -> None:
    await service.delete_field(field_id)


@router.delete(
    _NESTED + "/{field_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete field of a project entity",
    responses={
        204: {"description": "Field deleted"},
        404: {"description": "Project, entity or field not found"},
    },
)
async def delete_project_entity_field(
    project_id: UUID, entity_id: UUID, field_id: UUID, service: FieldServiceDep
) -> None:
    await service.delete_field(field_id, entity_id=entity_id, project_id=project_id)
