"""
Request shaping and response normalization for the DPCM API.

Typical usage::

    from verify_privacy.services import (
        normalize_items,
        item_key_set,
        normalize_metadata,
        reduce_assessment,
    )
"""

from verify_privacy.services.assessmentReducer import (
    NO_CONSENT_FOUND_CODE,
    reduce_assessment,
)
from verify_privacy.services.consentRequestBuilder import (
    DEFAULT_ACCESS_TYPE,
    apply_context,
    build_approval_request,
    build_consent_operations,
    build_presentation_request,
    consent_search_filter,
    context_fields,
    end_time_update,
    normalize_items,
)
from verify_privacy.services.metadataNormalizer import (
    item_key,
    item_key_set,
    normalize_metadata,
)

__all__ = [
    # assessmentReducer
    "NO_CONSENT_FOUND_CODE",
    "reduce_assessment",
    # consentRequestBuilder
    "DEFAULT_ACCESS_TYPE",
    "apply_context",
    "build_approval_request",
    "build_consent_operations",
    "build_presentation_request",
    "consent_search_filter",
    "context_fields",
    "end_time_update",
    "normalize_items",
    # metadataNormalizer
    "item_key",
    "item_key_set",
    "normalize_metadata",
]
