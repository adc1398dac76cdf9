"""
Verify REST transport -- VERIFY-PRIV-INT-001
=============================================

Thin async wrapper around ``httpx`` that authorizes every call with the
bearer token supplied at construction and returns parsed JSON bodies.

Failures surface as a small typed hierarchy so callers can match on the
kind of failure instead of probing optional attributes:

* ``NetworkError``            -- timeout or connection failure, no response
* ``HttpStatusError``         -- non-2xx response; ``status`` and ``body``
* ``ResponseValidationError`` -- 2xx response the SDK cannot use

No retries are performed here.  One public SDK call maps to exactly one
HTTP request.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from verify_privacy.core.config import AuthConfig, ClientConfig

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 10.0


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TransportError(Exception):
    """Base class for every failure raised by a transport."""

    def __init__(self, message: str, status: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status={self.status!r})"
        )


class NetworkError(TransportError):
    """The request never produced an HTTP response."""


class HttpStatusError(TransportError):
    """Verify answered with a non-2xx status code."""

    def __init__(self, message: str, status: int, body: Any = None) -> None:
        super().__init__(message, status=status, body=body)


class ResponseValidationError(TransportError):
    """A successful response did not have the expected shape."""


# ---------------------------------------------------------------------------
# Transport contract
# ---------------------------------------------------------------------------


class Transport(Protocol):
    """What the SDK needs from an HTTP client."""

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any: ...

    async def post(self, path: str, body: Any) -> Any: ...

    async def patch(self, path: str, body: Any) -> Any: ...


def _decode_error_body(response: httpx.Response) -> Any:
    """Best-effort decode of an error response body."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class VerifyTransport:
    """Bearer-authenticated JSON client bound to one Verify tenant.

    Args:
        base_url: Tenant URL including the protocol.
        access_token: OAuth 2.0 access token sent as ``Authorization: Bearer``.
        timeout: Per-request timeout in seconds.
        http_transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``
            in tests.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        *,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._timeout = timeout
        self._http_transport = http_transport

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        auth: AuthConfig,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> VerifyTransport:
        return cls(
            config.tenant_url,
            auth.access_token,
            timeout=config.request_timeout,
            http_transport=http_transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=self._http_transport,
        ) as client:
            try:
                response = await client.request(
                    method, path, params=params, json=json_body
                )
            except httpx.TimeoutException as exc:
                logger.warning("Verify %s %s timed out: %s", method, path, exc)
                raise NetworkError(f"Verify {method} {path} timed out") from exc
            except httpx.TransportError as exc:
                logger.warning("Verify %s %s connection error: %s", method, path, exc)
                raise NetworkError(f"Verify {method} {path} failed: {exc}") from exc

        if not response.is_success:
            body = _decode_error_body(response)
            logger.warning(
                "Verify %s %s returned HTTP %d", method, path, response.status_code
            )
            raise HttpStatusError(
                f"Verify API error: HTTP {response.status_code}",
                status=response.status_code,
                body=body,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise ResponseValidationError(
                f"Verify {method} {path} returned a non-JSON body",
                status=response.status_code,
                body=response.text,
            ) from exc

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Any) -> Any:
        return await self._request("POST", path, json_body=body)

    async def patch(self, path: str, body: Any) -> Any:
        return await self._request("PATCH", path, json_body=body)
