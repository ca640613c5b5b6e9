from fastapi import APIRouter

from src.oroya.api.v1 import analytics, entities, fields, files, projects, relationships

api_router = APIRouter(prefix="/api")
api_router.include_router(projects.router)
api_router.include_router(entities.router)
api_router.include_router(fields.router)
api_router.include_router(relationships.router)
api_router.include_router(files.router)
api_router.include_router(analytics.router)
