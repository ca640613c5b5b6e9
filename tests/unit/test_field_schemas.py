"""Tests for field request schemas."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.oroya.models import FieldType
from src.oroya.schemas import FieldCreate, FieldUpdate, ProjectUpdate

pytestmark = pytest.mark.unit


def test_camel_case_input_accepted():
    field = FieldCreate.model_validate(
        {"name": "isActive", "type": "boolean", "isUnique": True, "defaultValue": "false"}
    )
    assert field.type is FieldType.BOOLEAN
    assert field.is_unique is True
    assert field.default_value == "false"


def test_snake_case_input_accepted():
    field = FieldCreate(name="firstName", type=FieldType.STRING, max_length=80)
    assert field.max_length == 80


def test_max_file_size_above_limit_rejected():
    with pytest.raises(ValidationError) as exc_info:
        FieldCreate(name="attachment", type=FieldType.FILE, max_file_size=60_000_000)
    assert "Max file size cannot exceed 50MB" in str(exc_info.value)


def test_max_file_size_within_limit_accepted():
    field = FieldCreate(name="attachment", type=FieldType.FILE, max_file_size=10_000_000)
    assert field.max_file_size == 10_000_000


def test_zero_max_file_size_rejected():
    with pytest.raises(ValidationError):
        FieldCreate(name="attachment", type=FieldType.FILE, max_file_size=0)


def test_allowed_extensions_normalised():
    field = FieldCreate(name="scan", type=FieldType.DOCUMENT, allowed_extensions=" .PDF, .Png ")
    assert field.allowed_extensions == ".pdf,.png"


@pytest.mark.parametrize("value", ["pdf", ".p df", ".pdf,png", ",,"])
def test_malformed_extensions_rejected(value: str):
    with pytest.raises(ValidationError):
        FieldCreate(name="scan", type=FieldType.DOCUMENT, allowed_extensions=value)


def test_foreign_key_requires_both_references():
    with pytest.raises(ValidationError) as exc_info:
        FieldCreate(name="ownerId", type=FieldType.STRING, is_foreign_key=True)
    assert "foreignEntityId" in str(exc_info.value)


def test_references_cleared_when_not_foreign_key():
    field = FieldCreate(
        name="ownerId",
        type=FieldType.STRING,
        foreign_entity_id=uuid4(),
        foreign_field_id=uuid4(),
    )
    assert field.foreign_entity_id is None
    assert field.foreign_field_id is None


def test_invalid_type_rejected():
    with pytest.raises(ValidationError):
        FieldCreate.model_validate({"name": "price", "type": "money"})


def test_update_requires_some_field():
    with pytest.raises(ValidationError) as exc_info:
        FieldUpdate()
    assert "At least one field must be provided" in str(exc_info.value)


def test_update_patch_contains_only_sent_keys():
    update = FieldUpdate.model_validate({"description": None, "required": True})
    assert update.to_patch() == {"description": None, "required": True}


def test_update_rejects_null_type():
    with pytest.raises(ValidationError):
        FieldUpdate.model_validate({"type": None})


def test_project_update_rejects_null_name():
    with pytest.raises(ValidationError):
        ProjectUpdate.model_validate({"name": None})
