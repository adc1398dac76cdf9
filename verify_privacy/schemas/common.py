"""
Shared base classes for the Verify wire schemas.

Verify speaks camelCase JSON.  Models expose snake_case attributes and use
Pydantic's ``alias_generator`` together with ``populate_by_name=True`` so both
spellings are accepted on construction.  Server payloads keep any field the
SDK does not model (``extra="allow"``).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


def _to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase."""
    parts = name.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class WireModel(BaseModel):
    """Base for payloads received from (or sent to) Verify."""

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OutputModel(BaseModel):
    """Base for structures the SDK builds and hands to the caller."""

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class VerifyError(WireModel):
    """The standard Verify error body."""

    message_id: Optional[str] = None
    message_description: Optional[str] = None
