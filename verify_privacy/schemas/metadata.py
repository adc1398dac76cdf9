"""
Pydantic v2 schemas for the data subject presentation endpoint and the
flattened consent metadata the SDK derives from it.

Server-side shapes (``PurposeDescriptor`` and friends) are validated once at
the transport boundary so the normalizer can rely on well-formed input.
``MetadataRecord`` and ``Metadata`` are SDK output.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import Field, field_validator

from verify_privacy.schemas.common import OutputModel, WireModel
from verify_privacy.schemas.consent import ConsentRecord

EULA_CATEGORY = "eula"


# ---------------------------------------------------------------------------
# Server payload
# ---------------------------------------------------------------------------


class AccessTypeBinding(WireModel):
    """An access type as bound to a purpose or to a purpose attribute."""

    id: str
    legal_category: Optional[int] = None
    assent_ui_default: Optional[bool] = Field(default=None, alias="assentUIDefault")


class PurposeAttribute(WireModel):
    id: str
    access_types: list[AccessTypeBinding] = Field(default_factory=list)

    @field_validator("access_types", mode="before")
    @classmethod
    def _null_access_types(cls, value: Any) -> Any:
        return [] if value is None else value


class TermsOfUse(WireModel):
    ref: Optional[str] = None


class PurposeDescriptor(WireModel):
    id: Optional[str] = None
    name: Optional[str] = None
    version: Optional[int] = None
    category: Optional[str] = None
    description: Optional[str] = None
    attributes: Optional[list[PurposeAttribute]] = None
    access_types: list[AccessTypeBinding] = Field(default_factory=list)
    default_consent_duration: Optional[int] = None
    terms_of_use: Optional[TermsOfUse] = None

    @field_validator("access_types", mode="before")
    @classmethod
    def _null_access_types(cls, value: Any) -> Any:
        # Purposes with attributes may send accessTypes: null.
        return [] if value is None else value

    @property
    def is_eula(self) -> bool:
        return self.category == EULA_CATEGORY


class AttributeDescriptor(WireModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class AccessTypeDescriptor(WireModel):
    id: Optional[str] = None
    name: Optional[str] = None


def _index_by_id(value: Any) -> Any:
    """Accept either an id-keyed object or a list of objects with ``id``."""
    if value is None:
        return {}
    if isinstance(value, list):
        indexed: dict[str, Any] = {}
        for position, entry in enumerate(value):
            key = entry.get("id") if isinstance(entry, dict) else None
            indexed[str(key) if key is not None else str(position)] = entry
        return indexed
    return value


class DataSubjectPresentation(WireModel):
    """Body of ``POST /v1.0/privacy/data-subject-presentation``."""

    purposes: dict[str, PurposeDescriptor] = Field(default_factory=dict)
    attributes: dict[str, AttributeDescriptor] = Field(default_factory=dict)
    access_types: dict[str, AccessTypeDescriptor] = Field(default_factory=dict)
    consents: dict[str, ConsentRecord] = Field(default_factory=dict)

    @field_validator("purposes", "attributes", "access_types", "consents", mode="before")
    @classmethod
    def _coerce_collections(cls, value: Any) -> Any:
        return _index_by_id(value)


# ---------------------------------------------------------------------------
# SDK output
# ---------------------------------------------------------------------------


class MetadataStatus(str, enum.Enum):
    """Whether the subject has a consent record for a metadata item."""

    NONE = "NONE"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"


class MetadataRecord(OutputModel):
    """One purpose/attribute/access type combination on a consent page.

    ``ACTIVE`` only means a live consent record exists; the recorded
    ``consent_type`` may still be a denial.
    """

    purpose_id: str
    purpose_name: Optional[str] = None
    attribute_id: Optional[str] = None
    attribute_name: Optional[str] = None
    access_type_id: str
    access_type: Optional[str] = None
    default_consent_duration: Optional[int] = None
    assent_ui_default: Optional[bool] = Field(default=None, alias="assentUIDefault")
    legal_category: Optional[int] = None
    terms_of_use_ref: Optional[str] = None
    status: MetadataStatus = MetadataStatus.NONE
    consent: Optional[ConsentRecord] = None
    consent_type: Optional[int] = None


class Metadata(OutputModel):
    """Metadata records bucketed by purpose category."""

    eula: list[MetadataRecord] = Field(default_factory=list)
    default: list[MetadataRecord] = Field(default_factory=list)
