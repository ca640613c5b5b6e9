"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, EntityFactory, ...
"""

from tests.factories.base import BaseFactory, short_suffix
from tests.factories.files import ApiLogFactory, FileRecordFactory
from tests.factories.schema import EntityFactory, FieldFactory, ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "short_suffix",
    # Schema
    "ProjectFactory",
    "EntityFactory",
    "FieldFactory",
    # Files and logs
    "FileRecordFactory",
    "ApiLogFactory",
]
