"""
Low-level DPCM client.

Unlike ``Privacy`` this client takes the auth object on every call and
returns Verify's bodies untouched: ``{"status": "done", "response": ...}`` on
success and ``{"status": "deny", "detail": ...}`` when the call fails.
Useful when one process serves many users, each with their own token.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from verify_privacy.core.config import (
    AuthConfig,
    ClientConfig,
    SubjectContext,
    load_auth_config,
    load_client_config,
    load_subject_context,
)
from verify_privacy.integrations.dpcm import DPCMService
from verify_privacy.integrations.transport import Transport, TransportError, VerifyTransport
from verify_privacy.privacy import error_detail
from verify_privacy.schemas.envelope import STATUS_DENY, STATUS_DONE, ResponseEnvelope

logger = logging.getLogger(__name__)

TransportFactory = Callable[[ClientConfig, AuthConfig], Transport]


class DPCM:
    def __init__(
        self,
        config: ClientConfig | Mapping[str, Any],
        context: SubjectContext | Mapping[str, Any] | None = None,
        *,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        self._config = load_client_config(config)
        self._context = load_subject_context(context)
        self._transport_factory = transport_factory or VerifyTransport.from_config

    def _service(self, auth: AuthConfig | Mapping[str, Any]) -> DPCMService:
        transport = self._transport_factory(self._config, load_auth_config(auth))
        return DPCMService(transport, self._context)

    async def _call(self, method_name: str, call: Awaitable[Any]) -> ResponseEnvelope:
        try:
            response = await call
        except TransportError as exc:
            logger.debug("[%s] error: %r", method_name, exc)
            return ResponseEnvelope(status=STATUS_DENY, detail=error_detail(exc))

        logger.debug("[%s] response: %s", method_name, response)
        return ResponseEnvelope(status=STATUS_DONE, response=response)

    async def request_approval(
        self,
        auth: AuthConfig | Mapping[str, Any],
        items: Iterable[Any],
    ) -> ResponseEnvelope:
        """Raw data usage approval for *items*."""
        return await self._call(
            "DPCM:requestApproval(auth, items)",
            self._service(auth).request_approval(items),
        )

    async def get_consent_metadata(
        self,
        auth: AuthConfig | Mapping[str, Any],
        purpose_ids: Iterable[str],
    ) -> ResponseEnvelope:
        """Raw data subject presentation for *purpose_ids*."""
        return await self._call(
            "DPCM:getConsentMetadata(auth, purposes)",
            self._service(auth).get_consent_metadata(purpose_ids),
        )

    async def store_consents(
        self,
        auth: AuthConfig | Mapping[str, Any],
        consents: Iterable[Any],
    ) -> ResponseEnvelope:
        """Store consents; Verify accepts at most 10 operations per call."""
        return await self._call(
            "DPCM:storeConsents(auth, consents)",
            self._service(auth).store_consents(consents),
        )

    async def get_user_consents(self, auth: AuthConfig | Mapping[str, Any]) -> ResponseEnvelope:
        """Raw consent listing for the context subject."""
        return await self._call(
            "DPCM:getUserConsents(auth)",
            self._service(auth).get_user_consents(),
        )
