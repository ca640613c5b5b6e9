"""Relationship endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.oroya.api.dependencies import RelationshipServiceDep
from src.oroya.schemas import (
    RelationshipCreate,
    RelationshipDetail,
    RelationshipExists,
    RelationshipRead,
    RelationshipUpdate,
)

router = APIRouter(tags=["relationships"])


@router.get(
    "/relationships",
    response_model=list[RelationshipDetail],
    summary="List relationships",
    description="All relationships with the names of both entities and anchor fields.",
)
async def list_relationships(service: RelationshipServiceDep) -> list[RelationshipDetail]:
    rows = await service.list_detailed()
    return [RelationshipDetail.model_validate(row) for row in rows]


@router.post(
    "/relationships",
    response_model=RelationshipRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create relationship",
    responses={
        400: {"description": "Duplicate relationship or anchor field on the wrong entity"},
        404: {"description": "Entity or field not found"},
    },
)
async def create_relationship(
    body: RelationshipCreate, service: RelationshipServiceDep
) -> RelationshipRead:
    relationship = await service.create_relationship(body)
    return RelationshipRead.model_validate(relationship)


# Declared before /relationships/{relationship_id} so "exists" is not parsed as an id
@router.get(
    "/relationships/exists",
    response_model=RelationshipExists,
    summary="Check for a relationship between two entities",
)
async def relationship_exists(
    service: RelationshipServiceDep,
    source_entity_id: Annotated[UUID, Query(alias="sourceEntityId")],
    target_entity_id: Annotated[UUID, Query(alias="targetEntityId")],
    exclude_id: Annotated[UUID | None, Query(alias="excludeId")] = None,
) -> RelationshipExists:
    exists = await service.exists_between(source_entity_id, target_entity_id, exclude_id)
    return RelationshipExists(exists=exists)


@router.get(
    "/relationships/{relationship_id}",
    response_model=RelationshipRead,
    summary="Get relationship",
    responses={404: {"description": "Relationship not found"}},
)
async def get_relationship(
    relationship_id: UUID, service: RelationshipServiceDep
) -> RelationshipRead:
    relationship = await service.get_relationship(relationship_id)
    return RelationshipRead.model_validate(relationship)


@router.put(
    "/relationships/{relationship_id}",
    response_model=RelationshipRead,
    summary="Update relationship",
    responses={
        400: {"description": "Duplicate relationship or anchor field on the wrong entity"},
        404: {"description": "Relationship or field not found"},
    },
)
async def update_relationship(
    relationship_id: UUID, body: RelationshipUpdate, service: RelationshipServiceDep
) -> RelationshipRead:
    relationship = await service.update_relationship(relationship_id, body)
    return RelationshipRead.model_validate(relationship)


@router.delete(
    "/relationships/{relationship_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete relationship",
    responses={
        204: {"description": "Relationship deleted"},
        404: {"description": "Relationship not found"},
    },
)
async def delete_relationship(relationship_id: UUID, service: RelationshipServiceDep) -> None:
    await service.delete_relationship(relationship_id)


@router.get(
    "/entities/{entity_id}/relationships",
    response_model=list[RelationshipRead],
    summary="List relationships of an entity",
    description="Relationships where the entity is either the source or the target.",
    responses={404: {"description": "Entity not found"}},
)
async def list_entity_relationships(
    entity_id: UUID, service: RelationshipServiceDep
) -> list[RelationshipRead]:
    relationships = await service.list_for_entity(entity_id)
    return [RelationshipRead.model_validate(r) for r in relationships]
