"""Model exports.

Import from here: `from src.oroya.models import Project, Entity`
"""

from src.oroya.models.api_log import ApiLog
from src.oroya.models.entity import Entity
from src.oroya.models.enums import FieldType, FileVariant, LogLevel, RelationshipType
from src.oroya.models.field import EntityField
from src.oroya.models.file import FieldFile, FileRecord
from src.oroya.models.project import Project
from src.oroya.models.relationship import EntityRelationship

__all__ = [
    # Enums
    "FieldType",
    "FileVariant",
    "LogLevel",
    "RelationshipType",
    # Tables
    "ApiLog",
    "Entity",
    "EntityField",
    "EntityRelationship",
    "FieldFile",
    "FileRecord",
    "Project",
]
