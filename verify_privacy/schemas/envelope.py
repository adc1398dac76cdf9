"""
Response envelopes returned by the ``Privacy`` facade.

Every facade operation returns an envelope rather than raising.  ``status``
is ``"error"`` when the call failed, in which case ``detail`` carries the
Verify error body if one was received.
"""

from __future__ import annotations

from typing import Any, Optional

from verify_privacy.schemas.assessment import AssessmentResult
from verify_privacy.schemas.common import OutputModel
from verify_privacy.schemas.consent import ConsentRecord
from verify_privacy.schemas.metadata import Metadata

STATUS_DONE = "done"
STATUS_ERROR = "error"
STATUS_DENY = "deny"

# Overall assessment statuses
STATUS_APPROVED = "approved"
STATUS_CONSENT = "consent"
STATUS_DENIED = "denied"


class Envelope(OutputModel):
    status: str
    detail: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.status not in (STATUS_ERROR, STATUS_DENY)


class AssessmentEnvelope(Envelope):
    """``approved`` / ``consent`` / ``denied`` / ``error``."""

    assessment: Optional[list[AssessmentResult]] = None


class MetadataEnvelope(Envelope):
    metadata: Optional[Metadata] = None


class ConsentsEnvelope(Envelope):
    consents: Optional[list[ConsentRecord]] = None


class ResponseEnvelope(Envelope):
    """Carries the raw Verify response body."""

    response: Optional[Any] = None


class StoreEnvelope(ResponseEnvelope):
    """Result of a batched consent write; 207 bodies list per-operation outcomes."""
