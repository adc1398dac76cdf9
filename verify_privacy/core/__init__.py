"""Configuration, logging setup and small shared helpers."""

from verify_privacy.core.config import (
    AuthConfig,
    ClientConfig,
    ConfigurationError,
    Settings,
    SubjectContext,
)
from verify_privacy.core.logging_config import configure_logging

__all__ = [
    "AuthConfig",
    "ClientConfig",
    "ConfigurationError",
    "Settings",
    "SubjectContext",
    "configure_logging",
]
