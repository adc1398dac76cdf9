"""
Pydantic v2 schemas for user consent records.

``ConsentRecord`` is what Verify returns, either inside the data subject
presentation or from the consent listing endpoint.  ``ConsentDraft`` and
``PatchOperation`` describe what the SDK sends when storing consents.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import Field, field_validator

from verify_privacy.schemas.common import WireModel


class ConsentType(enum.IntEnum):
    """The consent decision recorded for the subject (``state``)."""

    ALLOW = 1
    DENY = 2
    OPT_IN = 3
    OPT_OUT = 4
    TRANSPARENCY = 5


class ConsentStatus(enum.IntEnum):
    """Lifecycle status Verify computes for a stored consent."""

    ACTIVE = 1
    EXPIRED = 2
    INACTIVE = 3
    NEW_CONSENT_REQUIRED = 8


class CustomAttribute(WireModel):
    key: str
    value: Any = None


class ConsentRecord(WireModel):
    """A user consent record as returned by Verify.

    ``state`` and ``status`` are kept as plain integers so that codes added
    server-side do not fail validation; compare them against
    ``ConsentType`` / ``ConsentStatus``.
    """

    id: Optional[str] = None
    purpose_id: str
    attribute_id: Optional[str] = None
    attribute_value: Optional[str] = None
    access_type_id: Optional[str] = None
    subject_id: Optional[str] = None
    application_id: Optional[str] = None
    state: Optional[int] = None
    status: Optional[int] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    is_global: Optional[bool] = None
    geo_ip: Optional[str] = Field(default=None, alias="geoIP")
    custom_attributes: list[CustomAttribute] = Field(default_factory=list)

    @field_validator("custom_attributes", mode="before")
    @classmethod
    def _null_custom_attributes(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_active(self) -> bool:
        return self.status == ConsentStatus.ACTIVE


class ConsentDraft(WireModel):
    """A consent the caller wants to store for the current subject."""

    purpose_id: str
    attribute_id: Optional[str] = None
    attribute_value: Optional[str] = None
    access_type_id: Optional[str] = None
    state: ConsentType
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    is_global: Optional[bool] = None
    custom_attributes: Optional[list[CustomAttribute]] = None


class PatchOperation(WireModel):
    """One operation of the batched ``PATCH /v1.0/privacy/consents`` call.

    ``add`` carries a consent object in ``value``; ``replace`` is only valid
    for ``/{consentId}/endTime`` and carries an epoch timestamp.
    """

    op: str
    path: Optional[str] = None
    value: Any = None
