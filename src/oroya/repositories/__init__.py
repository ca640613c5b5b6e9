"""Data access layer."""

from src.oroya.repositories.api_log import ApiLogRepository
from src.oroya.repositories.base import BaseRepository
from src.oroya.repositories.entity import EntityRepository
from src.oroya.repositories.field import FieldRepository
from src.oroya.repositories.file import FileRepository
from src.oroya.repositories.project import ProjectRepository
from src.oroya.repositories.relationship import RelationshipRepository

__all__ = [
    "ApiLogRepository",
    "BaseRepository",
    "EntityRepository",
    "FieldRepository",
    "FileRepository",
    "ProjectRepository",
    "RelationshipRepository",
]
