"""Project endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.oroya.api.dependencies import ProjectServiceDep
from src.oroya.schemas import MessageResponse, ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="List all projects, newest first.",
)
async def list_projects(service: ProjectServiceDep) -> list[ProjectRead]:
    projects = await service.list_projects()
    return [ProjectRead.model_validate(p) for p in projects]


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: UUID, service: ProjectServiceDep) -> ProjectRead:
    project = await service.get_project(project_id)
    return ProjectRead.model_validate(project)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        400: {"description": "Invalid name or a project with this name already exists"},
    },
)
async def create_project(body: ProjectCreate, service: ProjectServiceDep) -> ProjectRead:
    project = await service.create_project(body)
    return ProjectRead.model_validate(project)


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Replace project",
    description="Replace name and description. The name is required.",
    responses={
        200: {"description": "Project updated"},
        400: {"description": "Invalid name or duplicate"},
        404: {"description": "Project not found"},
    },
)
async def replace_project(
    project_id: UUID, body: ProjectCreate, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.replace_project(project_id, body)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Update only the fields that are sent. At least one is required.",
    responses={
        200: {"description": "Project updated"},
        400: {"description": "Invalid name, duplicate, or empty body"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID, body: ProjectUpdate, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.update_project(project_id, body)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete project",
    description="Delete a project together with its entities and their fields.",
    responses={
        200: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project_id: UUID, service: ProjectServiceDep) -> MessageResponse:
    await service.delete_project(project_id)
    return MessageResponse(message="Project deleted successfully")
