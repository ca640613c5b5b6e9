"""Property-based tests for name validators using hypothesis."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.oroya.core.validators import (
    DUPLICATE_ENTITY_MESSAGE,
    DUPLICATE_FIELD_MESSAGE,
    DUPLICATE_PROJECT_MESSAGE,
    RESERVED_FIELD_MESSAGE,
    RESERVED_FIELD_NAMES,
    validate_entity_name,
    validate_field_name,
    validate_project_name,
)

pytestmark = pytest.mark.unit

valid_project_name = st.from_regex(r"[a-zA-Z0-9 \-_]{3,50}", fullmatch=True)
valid_entity_name = st.from_regex(r"[a-zA-Z][a-zA-Z0-9]{1,29}", fullmatch=True)
valid_field_name = st.from_regex(r"[a-z][a-zA-Z0-9]{1,19}", fullmatch=True).filter(
    lambda s: s.lower() not in RESERVED_FIELD_NAMES
)


@given(name=valid_project_name)
@settings(max_examples=100)
def test_valid_project_names_accepted(name: str):
    assert validate_project_name(name) is None


@given(name=st.text(alphabet="abc", min_size=1, max_size=2))
def test_short_project_names_rejected(name: str):
    assert validate_project_name(name) == "Project name must be at least 3 characters"


@given(name=st.text(alphabet="abc", min_size=51, max_size=80))
def test_long_project_names_rejected(name: str):
    assert validate_project_name(name) == "Project name cannot exceed 50 characters"


@given(
    name=st.from_regex(r"[a-z]{3,10}[!@#$%.,]", fullmatch=True),
)
def test_project_name_charset_rejected(name: str):
    assert validate_project_name(name) == (
        "Only letters, numbers, spaces, hyphens and underscores are allowed"
    )


def test_empty_project_name_is_required():
    assert validate_project_name("") == "Project name is required"


@given(name=valid_project_name)
def test_project_duplicate_is_case_insensitive(name: str):
    assert validate_project_name(name, [name.swapcase()]) == DUPLICATE_PROJECT_MESSAGE


def test_project_name_trailing_newline_rejected():
    assert validate_project_name("Shop\n") is not None


@given(name=valid_entity_name)
@settings(max_examples=100)
def test_valid_entity_names_accepted(name: str):
    assert validate_entity_name(name) is None


@given(name=st.from_regex(r"[0-9][a-zA-Z0-9]{1,20}", fullmatch=True))
def test_entity_names_starting_with_digit_rejected(name: str):
    assert validate_entity_name(name) == (
        "Must start with a letter and contain only letters and numbers (no spaces)"
    )


@pytest.mark.parametrize("name", ["User", "userProfile"])
def test_entity_examples_accepted(name: str):
    assert validate_entity_name(name, ["Order"]) is None


def test_entity_name_1user_rejected():
    assert validate_entity_name("1User") is not None


def test_entity_with_space_rejected():
    assert validate_entity_name("User Profile") is not None


def test_entity_duplicate_in_same_scope():
    assert validate_entity_name("product", ["Product"]) == DUPLICATE_ENTITY_MESSAGE


@given(name=valid_field_name)
@settings(max_examples=100)
def test_valid_field_names_accepted(name: str):
    assert validate_field_name(name) is None


@given(name=st.sampled_from(sorted(RESERVED_FIELD_NAMES)))
def test_reserved_words_rejected(name: str):
    assert validate_field_name(name) == RESERVED_FIELD_MESSAGE


def test_capitalised_id_fails_format():
    assert validate_field_name("Id") == (
        "Must start with a lowercase letter and use camelCase (e.g. firstName, isActive)"
    )


def test_lowercase_id_is_reserved():
    assert validate_field_name("id") == RESERVED_FIELD_MESSAGE


def test_field_duplicate_reported_before_reserved():
    assert validate_field_name("type", ["Type"]) == DUPLICATE_FIELD_MESSAGE


def test_field_duplicate_is_case_insensitive():
    assert validate_field_name("price", ["Price"]) == DUPLICATE_FIELD_MESSAGE


def test_field_name_too_long():
    assert validate_field_name("a" * 21) == "Field name cannot exceed 20 characters"
