"""
Shared pytest fixtures for the verify_privacy unit tests.

Provides a mock transport and sample Verify payloads so the facade, the
normalizer and the reducer can be exercised without a live tenant.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from verify_privacy.core.config import SubjectContext
from verify_privacy.privacy import Privacy

TENANT_URL = "https://tenant.verify.example.com"
ACCESS_TOKEN = "test-access-token"


# ---------------------------------------------------------------------------
# Transport mock
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_transport() -> AsyncMock:
    """Async mock exposing the transport contract.

    Tests configure ``mock_transport.post.return_value`` (or ``side_effect``)
    to control what Verify "answers".
    """
    transport = AsyncMock()
    transport.get = AsyncMock(return_value={"consents": []})
    transport.post = AsyncMock(return_value=[])
    transport.patch = AsyncMock(return_value={})
    return transport


@pytest.fixture
def subject_context() -> SubjectContext:
    return SubjectContext(
        subject_id="user-123",
        is_external_subject=True,
        ip_address="203.0.113.7",
    )


@pytest.fixture
def client(mock_transport: AsyncMock, subject_context: SubjectContext) -> Privacy:
    return Privacy(
        {"tenantUrl": TENANT_URL},
        {"accessToken": ACCESS_TOKEN},
        subject_context,
        transport=mock_transport,
    )


# ---------------------------------------------------------------------------
# Sample Verify payloads
# ---------------------------------------------------------------------------


def make_consent(
    purpose_id: str = "marketing",
    attribute_id: str | None = "11",
    access_type_id: str | None = "default",
    status: int = 1,
    state: int = 1,
    consent_id: str = "c-1",
) -> dict[str, Any]:
    consent: dict[str, Any] = {
        "id": consent_id,
        "purposeId": purpose_id,
        "state": state,
        "status": status,
        "startTime": 1700000000,
        "isGlobal": False,
    }
    if attribute_id is not None:
        consent["attributeId"] = attribute_id
    if access_type_id is not None:
        consent["accessTypeId"] = access_type_id
    return consent


@pytest.fixture
def sample_presentation() -> dict[str, Any]:
    """A data subject presentation with one attribute purpose and one EULA."""
    return {
        "purposes": {
            "marketing": {
                "id": "marketing",
                "name": "Marketing",
                "version": 2,
                "category": "default",
                "defaultConsentDuration": 365,
                "termsOfUse": {"ref": "https://example.com/marketing-terms"},
                "attributes": [
                    {
                        "id": "11",
                        "accessTypes": [
                            {"id": "default", "legalCategory": 4, "assentUIDefault": True},
                        ],
                    },
                    {
                        "id": "3",
                        "accessTypes": [
                            {"id": "default", "legalCategory": 3, "assentUIDefault": False},
                            {"id": "read", "legalCategory": 2},
                        ],
                    },
                ],
            },
            "terms": {
                "id": "terms",
                "name": "Terms of Service",
                "category": "eula",
                "accessTypes": [{"id": "default"}],
            },
        },
        "attributes": {
            "11": {"id": "11", "name": "mobile_number"},
            "3": {"id": "3", "name": "email"},
        },
        "accessTypes": {
            "default": {"id": "default", "name": "Default"},
            "read": {"id": "read", "name": "Read"},
        },
        "consents": {},
    }
