"""
Client configuration -- VERIFY-PRIV-CFG-001
============================================

Explicit configuration objects consumed by the ``Privacy`` and ``DPCM``
clients, plus a ``Settings`` loader for harnesses that want to build those
objects from environment variables.

The clients themselves never read the environment.  ``Settings`` is a
convenience for scripts and the ``python -m verify_privacy`` harness.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from verify_privacy.core.stringUtils import has


class ConfigurationError(ValueError):
    """Raised when a required configuration or auth property is missing."""


def _to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase."""
    parts = name.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


# ---------------------------------------------------------------------------
# Client-facing configuration objects
# ---------------------------------------------------------------------------


class ClientConfig(BaseModel):
    """System configuration: where the Verify tenant lives."""

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
        frozen=True,
    )

    tenant_url: str = Field(
        ..., description="The Verify tenant hostname, including the protocol."
    )
    request_timeout: float = Field(
        default=10.0, gt=0, description="Per-request timeout in seconds."
    )


class AuthConfig(BaseModel):
    """Encapsulates the OAuth 2.0 token used to authorize requests."""

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
        frozen=True,
    )

    access_token: str = Field(..., repr=False)


class SubjectContext(BaseModel):
    """Subject metadata attached to outbound requests.

    ``ip_address`` should be the address of the real user agent.  When the
    SDK runs in a backend, take it from the forwarded request headers rather
    than from the socket peer.
    """

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
        frozen=True,
    )

    subject_id: Optional[str] = None
    is_external_subject: Optional[bool] = None
    ip_address: Optional[str] = None


# ---------------------------------------------------------------------------
# Coercion helpers used by the clients
# ---------------------------------------------------------------------------


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    if value is None:
        return None
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, Mapping):
        return value
    raise ConfigurationError(
        f"Expected a mapping or a configuration model, got {type(value).__name__}"
    )


def load_client_config(config: ClientConfig | Mapping[str, Any] | None) -> ClientConfig:
    """Validate *config* and return a ``ClientConfig``."""
    if isinstance(config, ClientConfig):
        return config
    data = _as_mapping(config)
    if not has(data, "tenantUrl") and not has(data, "tenant_url"):
        raise ConfigurationError(
            "Cannot find property 'tenantUrl' in configuration settings."
        )
    return ClientConfig.model_validate(dict(data))


def load_auth_config(auth: AuthConfig | Mapping[str, Any] | None) -> AuthConfig:
    """Validate *auth* and return an ``AuthConfig``."""
    if isinstance(auth, AuthConfig):
        return auth
    data = _as_mapping(auth)
    if not has(data, "accessToken") and not has(data, "access_token"):
        raise ConfigurationError("Cannot find property 'accessToken' in auth")
    return AuthConfig.model_validate(dict(data))


def load_subject_context(
    context: SubjectContext | Mapping[str, Any] | None,
) -> SubjectContext:
    """Return a ``SubjectContext``; a missing context is an empty one."""
    if isinstance(context, SubjectContext):
        return context
    data = _as_mapping(context)
    if data is None:
        return SubjectContext()
    return SubjectContext.model_validate(dict(data))


# ---------------------------------------------------------------------------
# Environment loading (harness only)
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Environment-backed settings for scripts and the CLI harness."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Tenant --
    tenant_url: str = ""
    access_token: str = ""
    request_timeout: float = 10.0

    # -- Subject context --
    subject_id: Optional[str] = None
    is_external_subject: Optional[bool] = None
    ip_address: Optional[str] = None

    # -- Logging --
    log_level: str = "INFO"

    def client_config(self) -> ClientConfig:
        if not self.tenant_url:
            raise ConfigurationError("TENANT_URL is missing from the environment")
        return ClientConfig(
            tenant_url=self.tenant_url, request_timeout=self.request_timeout
        )

    def auth(self) -> AuthConfig:
        if not self.access_token:
            raise ConfigurationError("ACCESS_TOKEN is missing from the environment")
        return AuthConfig(access_token=self.access_token)

    def context(self) -> SubjectContext:
        return SubjectContext(
            subject_id=self.subject_id or None,
            is_external_subject=self.is_external_subject,
            ip_address=self.ip_address or None,
        )
