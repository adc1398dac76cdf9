"""
Privacy client -- VERIFY-PRIV-001
==================================

High-level entry point for backend applications that need to check data
usage approval, render consent pages and record user consents against IBM
Security Verify.

Every operation issues exactly one request to Verify and returns an
envelope instead of raising.  Transport failures become
``status == "error"`` with the Verify error body, when there is one, under
``detail``.  Only ``ConfigurationError`` is raised, and only from the
constructor.

Typical usage::

    client = Privacy(
        {"tenantUrl": "https://tenant.verify.ibm.com"},
        {"accessToken": token},
        {"subjectId": user_id, "ipAddress": client_ip},
    )
    result = await client.assess([{"purposeId": "marketing", "attributeId": "email"}])
    if result.status == "consent":
        page = await client.get_consent_metadata(items)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from verify_privacy.core.config import (
    AuthConfig,
    ClientConfig,
    SubjectContext,
    load_auth_config,
    load_client_config,
    load_subject_context,
)
from verify_privacy.integrations.dpcm import (
    DPCMService,
    parse_assessment,
    parse_consents,
    parse_presentation,
)
from verify_privacy.integrations.transport import (
    HttpStatusError,
    ResponseValidationError,
    Transport,
    TransportError,
    VerifyTransport,
)
from verify_privacy.schemas.assessment import RequestItem
from verify_privacy.schemas.envelope import (
    STATUS_DONE,
    STATUS_ERROR,
    AssessmentEnvelope,
    ConsentsEnvelope,
    MetadataEnvelope,
    StoreEnvelope,
)
from verify_privacy.services.assessmentReducer import reduce_assessment
from verify_privacy.services.consentRequestBuilder import normalize_items
from verify_privacy.services.metadataNormalizer import item_key_set, normalize_metadata

logger = logging.getLogger(__name__)

INVALID_DATATYPE = "INVALID_DATATYPE"
INVALID_REQUEST = "INVALID_REQUEST"


def error_detail(exc: TransportError) -> Any:
    """The ``detail`` to surface for a failed call, or ``None``."""
    if isinstance(exc, HttpStatusError):
        return exc.body
    if isinstance(exc, ResponseValidationError):
        return {"messageId": INVALID_DATATYPE, "messageDescription": exc.message}
    return None


class Privacy:
    """Data privacy & consent client bound to one token and one subject.

    Args:
        config: ``{"tenantUrl": ...}`` or a ``ClientConfig``.
        auth: ``{"accessToken": ...}`` or an ``AuthConfig``.
        context: Optional subject context (``subjectId``,
            ``isExternalSubject``, ``ipAddress``) or a ``SubjectContext``.
        transport: Transport to use instead of the default ``httpx`` one.

    Raises:
        ConfigurationError: ``tenantUrl`` or ``accessToken`` is missing.
    """

    def __init__(
        self,
        config: ClientConfig | Mapping[str, Any],
        auth: AuthConfig | Mapping[str, Any],
        context: SubjectContext | Mapping[str, Any] | None = None,
        *,
        transport: Transport | None = None,
    ) -> None:
        self._config = load_client_config(config)
        self._auth = load_auth_config(auth)
        self._context = load_subject_context(context)
        self._transport = transport or VerifyTransport.from_config(self._config, self._auth)

    @property
    def context(self) -> SubjectContext:
        return self._context

    def _service(self) -> DPCMService:
        return DPCMService(self._transport, self._context)

    # -- assessment ----------------------------------------------------------

    async def assess(
        self, items: Iterable[RequestItem | Mapping[str, Any]]
    ) -> AssessmentEnvelope:
        """Evaluate the data items requested for approval.

        Each item names a ``purposeId`` and optionally an ``accessTypeId``,
        ``attributeId`` and ``attributeValue``.  The envelope status is:

        * ``approved`` -- every item is approved
        * ``consent``  -- at least one item can be approved by asking the
          user for consent
        * ``denied``   -- nothing is approved and consent would not help
          (for example a geo-locked policy)
        * ``error``    -- invalid request or system failure
        """
        method_name = "Privacy:assess(items)"
        try:
            assessment = await self._service().request_approval(items)
        except TransportError as exc:
            logger.debug("[%s] error: %r", method_name, exc)
            return AssessmentEnvelope(status=STATUS_ERROR, detail=error_detail(exc))

        logger.debug("[%s] assessment: %s", method_name, assessment)

        if not isinstance(assessment, list):
            return AssessmentEnvelope(
                status=STATUS_ERROR,
                detail={
                    "messageId": INVALID_DATATYPE,
                    "messageDescription": (
                        "'assessment' is expected to be an array. "
                        f"Received {type(assessment).__name__}"
                    ),
                },
            )

        try:
            results = parse_assessment(assessment)
        except ResponseValidationError as exc:
            return AssessmentEnvelope(status=STATUS_ERROR, detail=error_detail(exc))

        return AssessmentEnvelope(status=reduce_assessment(results), assessment=results)

    # -- consent metadata ----------------------------------------------------

    async def get_consent_metadata(
        self, items: Iterable[RequestItem | Mapping[str, Any]]
    ) -> MetadataEnvelope:
        """Get the metadata needed to build a consent page.

        Items follow the ``assess`` shape; ``accessTypeId`` defaults to
        ``default`` and wildcards are not allowed.  The metadata lists one
        record per requested purpose/attribute/access type combination that
        Verify knows about, with the subject's current consent attached.
        The caller's items are not modified.
        """
        method_name = "Privacy:getConsentMetadata(items)"
        try:
            normalized = normalize_items(items)
        except ValidationError as exc:
            logger.debug("[%s] invalid items: %s", method_name, exc)
            return MetadataEnvelope(
                status=STATUS_ERROR,
                detail={"messageId": INVALID_REQUEST, "messageDescription": str(exc)},
            )

        purpose_ids = list(dict.fromkeys(item.purpose_id for item in normalized))
        item_keys = item_key_set(normalized)

        try:
            response = await self._service().get_consent_metadata(purpose_ids)
            presentation = parse_presentation(response)
        except TransportError as exc:
            logger.debug("[%s] error: %r detail: %s", method_name, exc, error_detail(exc))
            return MetadataEnvelope(status=STATUS_ERROR, detail=error_detail(exc))

        logger.debug("[%s] response: %s", method_name, response)
        metadata = normalize_metadata(item_keys, presentation)
        return MetadataEnvelope(status=STATUS_DONE, metadata=metadata)

    # -- consents ------------------------------------------------------------

    async def get_user_consents(self, application_id: str | None = None) -> ConsentsEnvelope:
        """Fetch the consents of the context subject.

        Without a ``subjectId`` in the context, the access token must be a
        user token.  ``application_id`` narrows the list to one application.
        """
        method_name = "Privacy:getUserConsents()"
        try:
            response = await self._service().get_user_consents(application_id)
            consents = parse_consents(response)
        except TransportError as exc:
            logger.debug("[%s] error: %r", method_name, exc)
            return ConsentsEnvelope(status=STATUS_ERROR, detail=error_detail(exc))

        logger.debug("[%s] %d consent(s)", method_name, len(consents))
        return ConsentsEnvelope(status=STATUS_DONE, consents=consents)

    async def store_consents(self, consents: Iterable[Any]) -> StoreEnvelope:
        """Record consents for the context subject in one batched request.

        Entries are consent objects (``purposeId``, ``attributeId``,
        ``accessTypeId``, ``state``, ...) or ``ConsentDraft`` models; they are
        sent as ``add`` operations.  To change the end time of an existing
        consent pass the operation from ``end_time_update`` instead.
        """
        method_name = "Privacy:storeConsents(consents)"
        try:
            response = await self._service().store_consents(consents)
        except TransportError as exc:
            logger.debug("[%s] error: %r", method_name, exc)
            return StoreEnvelope(status=STATUS_ERROR, detail=error_detail(exc))

        logger.debug("[%s] response: %s", method_name, response)
        return StoreEnvelope(status=STATUS_DONE, response=response)
