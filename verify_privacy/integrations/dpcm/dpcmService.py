"""
DPCM API service -- VERIFY-PRIV-INT-002
========================================

Calls the IBM Security Verify Data Privacy & Consent Management endpoints:

* ``POST  /v1.0/privacy/data-usage-approval``       -- assess data usage
* ``POST  /v1.0/privacy/data-subject-presentation`` -- consent page metadata
* ``PATCH /v1.0/privacy/consents``                  -- store consents
* ``GET   /config/v1.0/privacy/consents``           -- list consents

The service holds a ``Transport`` and the subject context; each method
shapes its body with the consent request builder and issues exactly one
request.  Methods return raw JSON; the ``parse_*`` helpers validate those
bodies into typed schemas and raise ``ResponseValidationError`` otherwise.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from verify_privacy.core.config import SubjectContext
from verify_privacy.integrations.transport import ResponseValidationError, Transport
from verify_privacy.schemas.assessment import AssessmentResult, RequestItem
from verify_privacy.schemas.consent import ConsentRecord
from verify_privacy.schemas.metadata import DataSubjectPresentation
from verify_privacy.services.consentRequestBuilder import (
    build_approval_request,
    build_consent_operations,
    build_presentation_request,
    consent_search_filter,
)

logger = logging.getLogger(__name__)

APPROVAL_PATH = "/v1.0/privacy/data-usage-approval"
PRESENTATION_PATH = "/v1.0/privacy/data-subject-presentation"
CONSENTS_PATH = "/v1.0/privacy/consents"
CONSENTS_CONFIG_PATH = "/config/v1.0/privacy/consents"


class DPCMService:
    """Data privacy & consent requests made with one access token."""

    def __init__(self, transport: Transport, context: SubjectContext | None = None) -> None:
        self._transport = transport
        self._context = context or SubjectContext()

    async def request_approval(
        self, items: Iterable[RequestItem | Mapping[str, Any]]
    ) -> Any:
        """Ask Verify to approve the use of *items*.

        Verify answers 200 when every item is approved and 207 when at least
        one is not; both carry a per-item decision list.  Malformed requests
        get a 400.
        """
        body = build_approval_request(self._context, items)
        logger.debug("data-usage-approval request: %s", body)
        return await self._transport.post(APPROVAL_PATH, body)

    async def get_consent_metadata(self, purpose_ids: Iterable[str]) -> Any:
        """Fetch purposes, attributes, access types and current consents."""
        body = build_presentation_request(self._context, purpose_ids)
        logger.debug("data-subject-presentation request: %s", body)
        return await self._transport.post(PRESENTATION_PATH, body)

    async def store_consents(self, consents: Iterable[Any]) -> Any:
        """Submit consent creations and end-time updates as one batch.

        A 207 response means some operations failed and the body must be
        inspected per operation.
        """
        operations = build_consent_operations(self._context, consents)
        logger.debug("consents patch: %d operation(s)", len(operations))
        return await self._transport.patch(CONSENTS_PATH, operations)

    async def get_user_consents(self, application_id: str | None = None) -> Any:
        """List consents, scoped to the context subject when one is set."""
        search = consent_search_filter(self._context, application_id)
        params = {"search": search} if search else None
        return await self._transport.get(CONSENTS_CONFIG_PATH, params=params)


# ---------------------------------------------------------------------------
# Response validation
# ---------------------------------------------------------------------------


def _invalid(what: str, exc: ValidationError, body: Any) -> ResponseValidationError:
    logger.warning("Unexpected %s payload: %s", what, exc)
    return ResponseValidationError(f"Unexpected {what} payload", body=body)


def parse_assessment(body: list[Any]) -> list[AssessmentResult]:
    try:
        return [AssessmentResult.model_validate(entry) for entry in body]
    except ValidationError as exc:
        raise _invalid("assessment", exc, body) from exc


def parse_presentation(body: Any) -> DataSubjectPresentation:
    try:
        return DataSubjectPresentation.model_validate(body)
    except ValidationError as exc:
        raise _invalid("data subject presentation", exc, body) from exc


def parse_consents(body: Any) -> list[ConsentRecord]:
    """Accept either a bare list or the ``{"consents": [...]}`` wrapper."""
    if isinstance(body, Mapping):
        body = body.get("consents") or []
    if not isinstance(body, list):
        raise ResponseValidationError(
            f"'consents' is expected to be a list. Received {type(body).__name__}",
            body=body,
        )
    try:
        return [ConsentRecord.model_validate(entry) for entry in body]
    except ValidationError as exc:
        raise _invalid("consents", exc, body) from exc
