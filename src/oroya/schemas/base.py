"""Shared schema base classes."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes as camelCase while accepting snake_case input too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PatchModel(CamelModel):
    """Partial update payload.

    Only fields the client actually sent end up in `to_patch()`, so an
    explicit null clears a column while an omitted key leaves it alone.
    """

    @model_validator(mode="after")
    def require_some_field(self) -> "PatchModel":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self

    def to_patch(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class MessageResponse(BaseModel):
    """Acknowledgement body for deletes."""

    success: bool = True
    message: str


def strip_optional(v: str | None) -> str | None:
    """Trim whitespace, mapping blank strings to None."""
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v
