"""Python client for the Oroya API with offline-capable state stores."""

from src.oroya.client.api import ApiError, OroyaClient
from src.oroya.client.result import Err, Ok, Result
from src.oroya.client.stores import EntityStore, FieldStore, FileStore, ProjectStore, Store

__all__ = [
    "ApiError",
    "EntityStore",
    "Err",
    "FieldStore",
    "FileStore",
    "Ok",
    "OroyaClient",
    "ProjectStore",
    "Result",
    "Store",
]
