"""
IBM Security Verify data privacy & consent client.

Typical usage::

    from verify_privacy import Privacy

    client = Privacy(config, auth, context)
    result = await client.assess(items)
"""

from verify_privacy.core.config import (
    AuthConfig,
    ClientConfig,
    ConfigurationError,
    SubjectContext,
)
from verify_privacy.dpcm import DPCM
from verify_privacy.integrations.transport import (
    HttpStatusError,
    NetworkError,
    ResponseValidationError,
    TransportError,
    VerifyTransport,
)
from verify_privacy.privacy import Privacy
from verify_privacy.schemas import ConsentStatus, ConsentType, MetadataStatus
from verify_privacy.services.consentRequestBuilder import end_time_update

__version__ = "0.1.0"

__all__ = [
    "DPCM",
    "AuthConfig",
    "ClientConfig",
    "ConfigurationError",
    "ConsentStatus",
    "ConsentType",
    "HttpStatusError",
    "MetadataStatus",
    "NetworkError",
    "Privacy",
    "ResponseValidationError",
    "SubjectContext",
    "TransportError",
    "VerifyTransport",
    "end_time_update",
]
