"""Name validators for projects, entities and fields.

Each validator returns the first error message that applies, or None.
Checks run in a fixed order: format rules first, then duplicate names
(case-insensitive), then reserved words (fields only).
"""

import re
from collections.abc import Callable, Iterable
from typing import Final

PROJECT_NAME_MIN: Final[int] = 3
PROJECT_NAME_MAX: Final[int] = 50
PROJECT_DESCRIPTION_MAX: Final[int] = 500
ENTITY_NAME_MIN: Final[int] = 2
ENTITY_NAME_MAX: Final[int] = 30
FIELD_NAME_MIN: Final[int] = 2
FIELD_NAME_MAX: Final[int] = 20
DESCRIPTION_MAX: Final[int] = 300
MAX_FIELD_FILE_SIZE: Final[int] = 50 * 1024 * 1024

PROJECT_NAME_REGEX: Final[str] = r"^[a-zA-Z0-9\s\-_]+$"
ENTITY_NAME_REGEX: Final[str] = r"^[a-zA-Z][a-zA-Z0-9]*$"
FIELD_NAME_REGEX: Final[str] = r"^[a-z][a-zA-Z0-9]*$"
EXTENSION_REGEX: Final[str] = r"^\.[a-zA-Z0-9]+$"

_PROJECT_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(PROJECT_NAME_REGEX)
_ENTITY_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(ENTITY_NAME_REGEX)
_FIELD_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(FIELD_NAME_REGEX)
_EXTENSION_PATTERN: Final[re.Pattern[str]] = re.compile(EXTENSION_REGEX)

RESERVED_FIELD_NAMES: Final[frozenset[str]] = frozenset(
    {
        "id",
        "class",
        "type",
        "function",
        "return",
        "if",
        "else",
        "for",
        "while",
        "do",
        "break",
        "continue",
        "switch",
        "case",
        "default",
        "try",
        "catch",
        "finally",
        "throw",
        "new",
        "this",
        "super",
        "extends",
        "implements",
        "interface",
        "package",
        "import",
        "export",
        "const",
        "let",
        "var",
        "true",
        "false",
        "null",
        "undefined",
    }
)

NameRule = tuple[Callable[[str], bool], str]


def _name_rules(
    label: str,
    min_length: int,
    max_length: int,
    pattern: re.Pattern[str],
    pattern_message: str,
) -> tuple[NameRule, ...]:
    return (
        (lambda name: len(name) >= 1, f"{label} name is required"),
        (
            lambda name: len(name) >= min_length,
            f"{label} name must be at least {min_length} characters",
        ),
        (
            lambda name: len(name) <= max_length,
            f"{label} name cannot exceed {max_length} characters",
        ),
        # fullmatch: `$` alone would accept a trailing newline
        (lambda name: pattern.fullmatch(name) is not None, pattern_message),
    )


PROJECT_NAME_RULES: Final = _name_rules(
    "Project",
    PROJECT_NAME_MIN,
    PROJECT_NAME_MAX,
    _PROJECT_NAME_PATTERN,
    "Only letters, numbers, spaces, hyphens and underscores are allowed",
)
ENTITY_NAME_RULES: Final = _name_rules(
    "Entity",
    ENTITY_NAME_MIN,
    ENTITY_NAME_MAX,
    _ENTITY_NAME_PATTERN,
    "Must start with a letter and contain only letters and numbers (no spaces)",
)
FIELD_NAME_RULES: Final = _name_rules(
    "Field",
    FIELD_NAME_MIN,
    FIELD_NAME_MAX,
    _FIELD_NAME_PATTERN,
    "Must start with a lowercase letter and use camelCase (e.g. firstName, isActive)",
)

DUPLICATE_PROJECT_MESSAGE: Final[str] = "A project with this name already exists"
DUPLICATE_ENTITY_MESSAGE: Final[str] = "An entity with this name already exists"
DUPLICATE_FIELD_MESSAGE: Final[str] = "A field with this name already exists"
RESERVED_FIELD_MESSAGE: Final[str] = "Reserved words cannot be used as field names"


def check_rules(name: str, rules: Iterable[NameRule]) -> str | None:
    """Return the message of the first rule `name` violates."""
    for check, message in rules:
        if not check(name):
            return message
    return None


def _is_duplicate(name: str, existing: Iterable[str]) -> bool:
    return name.lower() in {e.lower() for e in existing}


def is_reserved_field_name(name: str) -> bool:
    return name.lower() in RESERVED_FIELD_NAMES


def project_name_error(name: str) -> str | None:
    return check_rules(name, PROJECT_NAME_RULES)


def entity_name_error(name: str) -> str | None:
    return check_rules(name, ENTITY_NAME_RULES)


def field_name_error(name: str) -> str | None:
    return check_rules(name, FIELD_NAME_RULES)


def validate_project_name(name: str, existing: Iterable[str] = ()) -> str | None:
    """Validate a project name against format rules and existing names."""
    error = project_name_error(name)
    if error:
        return error
    if _is_duplicate(name, existing):
        return DUPLICATE_PROJECT_MESSAGE
    return None


def validate_entity_name(name: str, existing: Iterable[str] = ()) -> str | None:
    """Validate an entity name against format rules and sibling entity names."""
    error = entity_name_error(name)
    if error:
        return error
    if _is_duplicate(name, existing):
        return DUPLICATE_ENTITY_MESSAGE
    return None


def validate_field_name(name: str, existing: Iterable[str] = ()) -> str | None:
    """Validate a field name.

    Format is checked first, then duplicates among sibling fields, and
    finally the reserved-word list. So "Id" fails the camelCase format and
    "id" is reported as reserved.
    """
    error = field_name_error(name)
    if error:
        return error
    if _is_duplicate(name, existing):
        return DUPLICATE_FIELD_MESSAGE
    if is_reserved_field_name(name):
        return RESERVED_FIELD_MESSAGE
    return None


def split_extensions(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def validate_allowed_extensions(value: str) -> str | None:
    """Validate a comma separated extension list such as ".jpg, .png"."""
    extensions = split_extensions(value)
    if not extensions:
        return "Allowed extensions cannot be empty"
    for ext in extensions:
        if not _EXTENSION_PATTERN.fullmatch(ext):
            return f"Invalid extension '{ext}'. Use the .ext form, e.g. .jpg, .pdf"
    return None


def validate_max_file_size(value: int) -> str | None:
    if value <= 0:
        return "Max file size must be greater than 0"
    if value > MAX_FIELD_FILE_SIZE:
        return "Max file size cannot exceed 50MB"
    return None
