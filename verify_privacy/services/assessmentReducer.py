"""
Assessment reducer -- VERIFY-PRIV-SVC-003
==========================================

Folds Verify's per-item approval decisions into one overall status.

Rules, applied in order to the first decision of each item:

1. Approved: the status becomes ``approved`` if nothing has set it yet.
2. Not approved because no consent record exists (``CSIBT0033I``): the
   status becomes ``consent``, replacing an earlier ``approved``.  Asking the
   user for consent can still resolve these items.
3. Denied for any other reason: no effect.

If no item set a status, the result is ``denied``.
"""

from __future__ import annotations

from collections.abc import Iterable

from verify_privacy.schemas.assessment import AssessmentResult
from verify_privacy.schemas.envelope import (
    STATUS_APPROVED,
    STATUS_CONSENT,
    STATUS_DENIED,
)

NO_CONSENT_FOUND_CODE = "CSIBT0033I"


def reduce_assessment(results: Iterable[AssessmentResult]) -> str:
    """Return ``approved``, ``consent`` or ``denied`` for *results*."""
    status: str | None = None

    for item in results:
        decision = item.decision
        if decision is None:
            continue

        if decision.approved:
            if status is None:
                status = STATUS_APPROVED
            continue

        if decision.reason is not None and decision.reason.message_id == NO_CONSENT_FOUND_CODE:
            status = STATUS_CONSENT

    return status if status is not None else STATUS_DENIED
