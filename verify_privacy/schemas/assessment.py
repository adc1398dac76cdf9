"""
Pydantic v2 schemas for data usage approval (assessment).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, field_validator

from verify_privacy.schemas.common import WireModel, VerifyError


class RequestItem(WireModel):
    """A data item the caller wants to use, or to build a consent page for."""

    purpose_id: str = Field(
        ..., description="Purpose or EULA identifier configured on Verify."
    )
    access_type_id: Optional[str] = Field(
        default=None,
        description="Access type; Verify applies its default when omitted.",
    )
    attribute_id: Optional[str] = None
    attribute_value: Optional[str] = None


class AssessmentDecision(WireModel):
    approved: bool = False
    reason: Optional[VerifyError] = None


class AssessmentResult(WireModel):
    """Verify's decision for a single requested item."""

    purpose_id: Optional[str] = None
    access_type_id: Optional[str] = None
    attribute_id: Optional[str] = None
    attribute_value: Optional[str] = None
    result: list[AssessmentDecision] = Field(default_factory=list)

    @field_validator("result", mode="before")
    @classmethod
    def _wrap_single_result(cls, value: Any) -> Any:
        # Older tenants return a bare decision object instead of a list.
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value

    @property
    def decision(self) -> AssessmentDecision | None:
        return self.result[0] if self.result else None
