"""
Verify integration package.

Typical usage::

    from verify_privacy.integrations import (
        VerifyTransport,
        TransportError,
        HttpStatusError,
        DPCMService,
    )
"""

from verify_privacy.integrations.dpcm import DPCMService
from verify_privacy.integrations.transport import (
    HttpStatusError,
    NetworkError,
    ResponseValidationError,
    Transport,
    TransportError,
    VerifyTransport,
)

__all__ = [
    "DPCMService",
    "HttpStatusError",
    "NetworkError",
    "ResponseValidationError",
    "Transport",
    "TransportError",
    "VerifyTransport",
]
