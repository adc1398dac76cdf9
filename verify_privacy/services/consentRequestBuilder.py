"""
Consent request builder -- VERIFY-PRIV-SVC-001
===============================================

Shapes outbound payloads for the DPCM endpoints by attaching the subject
context (subject id, external-subject flag, geo IP) the client was created
with.

Rules
-----
* A context field is added only when it has a value.  Empty strings,
  ``None`` and a ``False`` external-subject flag never produce a key, so no
  ``null`` placeholders reach Verify.
* Business payloads are not validated here; unknown fields pass through.
* Nothing passed in by the caller is mutated.  Every builder returns new
  objects.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from verify_privacy.core.config import SubjectContext
from verify_privacy.schemas.assessment import RequestItem
from verify_privacy.schemas.common import WireModel
from verify_privacy.schemas.consent import PatchOperation

DEFAULT_ACCESS_TYPE = "default"

OP_ADD = "add"
OP_REPLACE = "replace"


def context_fields(context: SubjectContext) -> dict[str, Any]:
    """Return the context keys to merge into an outbound payload."""
    fields: dict[str, Any] = {}
    if context.subject_id:
        fields["subjectId"] = context.subject_id
    if context.is_external_subject:
        fields["isExternalSubject"] = context.is_external_subject
    if context.ip_address:
        fields["geoIP"] = context.ip_address
    return fields


def apply_context(context: SubjectContext, payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *payload* augmented with the context fields."""
    return {**payload, **context_fields(context)}


def _to_payload(entry: Any) -> Any:
    if isinstance(entry, WireModel):
        return entry.to_wire()
    if isinstance(entry, BaseModel):
        return entry.model_dump(by_alias=True, exclude_none=True)
    if isinstance(entry, Mapping):
        return dict(entry)
    return entry


# ---------------------------------------------------------------------------
# Request items
# ---------------------------------------------------------------------------


def normalize_items(items: Iterable[RequestItem | Mapping[str, Any]]) -> list[RequestItem]:
    """Return new ``RequestItem`` objects with ``access_type_id`` defaulted.

    The caller's objects are left untouched, so calling this twice on the
    same input yields the same result.
    """
    normalized: list[RequestItem] = []
    for item in items:
        model = item if isinstance(item, RequestItem) else RequestItem.model_validate(item)
        if not model.access_type_id:
            model = model.model_copy(update={"access_type_id": DEFAULT_ACCESS_TYPE})
        normalized.append(model)
    return normalized


def build_approval_request(
    context: SubjectContext,
    items: Iterable[RequestItem | Mapping[str, Any]],
) -> dict[str, Any]:
    """Body for ``POST /v1.0/privacy/data-usage-approval``."""
    return apply_context(context, {"items": [_to_payload(item) for item in items]})


def build_presentation_request(
    context: SubjectContext,
    purpose_ids: Iterable[str],
) -> dict[str, Any]:
    """Body for ``POST /v1.0/privacy/data-subject-presentation``."""
    return apply_context(context, {"purposeId": list(purpose_ids)})


# ---------------------------------------------------------------------------
# Consent writes
# ---------------------------------------------------------------------------


def end_time_update(consent_id: str, end_time: int) -> PatchOperation:
    """Operation that moves the end time of an existing consent."""
    return PatchOperation(op=OP_REPLACE, path=f"/{consent_id}/endTime", value=end_time)


def build_consent_operations(
    context: SubjectContext,
    consents: Iterable[Any],
) -> list[dict[str, Any]]:
    """Body for ``PATCH /v1.0/privacy/consents``.

    Plain consent entries are augmented and wrapped as ``add`` operations.
    Entries that already carry an ``op`` are kept as given; the ``value`` of
    an explicit ``add`` is augmented like a plain entry.
    """
    operations: list[dict[str, Any]] = []
    for entry in consents:
        payload = _to_payload(entry)
        if "op" in payload:
            value = payload.get("value")
            if payload["op"] == OP_ADD and isinstance(value, Mapping):
                payload["value"] = apply_context(context, value)
            operations.append(payload)
            continue
        operations.append({"op": OP_ADD, "value": apply_context(context, payload)})
    return operations


# ---------------------------------------------------------------------------
# Consent listing
# ---------------------------------------------------------------------------


def consent_search_filter(
    context: SubjectContext,
    application_id: str | None = None,
) -> str | None:
    """Search expression for ``GET /config/v1.0/privacy/consents``."""
    clauses: list[str] = []
    if context.subject_id:
        clauses.append(f'subjectId="{context.subject_id}"')
    if application_id:
        clauses.append(f'applicationId="{application_id}"')
    if not clauses:
        return None
    return "&".join(clauses)
