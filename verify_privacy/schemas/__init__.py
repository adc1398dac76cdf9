"""
Typed Verify payloads and SDK envelopes.

Typical usage::

    from verify_privacy.schemas import (
        RequestItem,
        ConsentType,
        MetadataRecord,
        MetadataStatus,
    )
"""

from verify_privacy.schemas.assessment import (
    AssessmentDecision,
    AssessmentResult,
    RequestItem,
)
from verify_privacy.schemas.common import VerifyError
from verify_privacy.schemas.consent import (
    ConsentDraft,
    ConsentRecord,
    ConsentStatus,
    ConsentType,
    CustomAttribute,
    PatchOperation,
)
from verify_privacy.schemas.envelope import (
    STATUS_APPROVED,
    STATUS_CONSENT,
    STATUS_DENIED,
    STATUS_DENY,
    STATUS_DONE,
    STATUS_ERROR,
    AssessmentEnvelope,
    ConsentsEnvelope,
    Envelope,
    MetadataEnvelope,
    ResponseEnvelope,
    StoreEnvelope,
)
from verify_privacy.schemas.metadata import (
    EULA_CATEGORY,
    AccessTypeBinding,
    AccessTypeDescriptor,
    AttributeDescriptor,
    DataSubjectPresentation,
    Metadata,
    MetadataRecord,
    MetadataStatus,
    PurposeAttribute,
    PurposeDescriptor,
    TermsOfUse,
)

__all__ = [
    # assessment
    "AssessmentDecision",
    "AssessmentResult",
    "RequestItem",
    # common
    "VerifyError",
    # consent
    "ConsentDraft",
    "ConsentRecord",
    "ConsentStatus",
    "ConsentType",
    "CustomAttribute",
    "PatchOperation",
    # envelope
    "STATUS_APPROVED",
    "STATUS_CONSENT",
    "STATUS_DENIED",
    "STATUS_DENY",
    "STATUS_DONE",
    "STATUS_ERROR",
    "AssessmentEnvelope",
    "ConsentsEnvelope",
    "Envelope",
    "MetadataEnvelope",
    "ResponseEnvelope",
    "StoreEnvelope",
    # metadata
    "EULA_CATEGORY",
    "AccessTypeBinding",
    "AccessTypeDescriptor",
    "AttributeDescriptor",
    "DataSubjectPresentation",
    "Metadata",
    "MetadataRecord",
    "MetadataStatus",
    "PurposeAttribute",
    "PurposeDescriptor",
    "TermsOfUse",
]
