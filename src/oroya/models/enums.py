"""Shared enums for models."""

from enum import Enum


class FieldType(str, Enum):
    """Data type of an entity field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    FILE = "file"
    IMAGE = "image"
    DOCUMENT = "document"

    @property
    def is_file_type(self) -> bool:
        return self in (FieldType.FILE, FieldType.IMAGE, FieldType.DOCUMENT)


class RelationshipType(str, Enum):
    """Cardinality of an edge between two entities."""

    ONE_TO_ONE = "one_to_one"
    ONE_TO_MANY = "one_to_many"
    MANY_TO_ONE = "many_to_one"
    MANY_TO_MANY = "many_to_many"


class FileVariant(str, Enum):
    """Stored representation of an uploaded file."""

    ORIGINAL = "original"
    COMPRESSED = "compressed"
    THUMBNAIL = "thumbnail"


class LogLevel(str, Enum):
    """Severity derived from a response status code."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def for_status(cls, status_code: int) -> "LogLevel":
        if status_code >= 500:
            return cls.ERROR
        if status_code >= 400:
            return cls.WARN
        return cls.INFO
