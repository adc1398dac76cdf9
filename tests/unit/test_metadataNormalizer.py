"""
Unit tests for the consent metadata normalizer.

Tests item key matching (including attribute name aliases), purpose-level
defaults, EULA bucketing and consent reconciliation.
"""

from typing import Any

import pytest

from tests.conftest import make_consent
from verify_privacy.schemas.metadata import DataSubjectPresentation, MetadataStatus
from verify_privacy.services.consentRequestBuilder import normalize_items
from verify_privacy.services.metadataNormalizer import (
    item_key,
    item_key_set,
    normalize_metadata,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _normalize(items: list[dict[str, Any]], presentation: dict[str, Any]):
    keys = item_key_set(normalize_items(items))
    return normalize_metadata(keys, DataSubjectPresentation.model_validate(presentation))


def _records(metadata) -> list:
    return metadata.eula + metadata.default


# ---------------------------------------------------------------------------
# Item keys
# ---------------------------------------------------------------------------


class TestItemKey:

    def test_full_key(self):
        assert item_key("marketing", "11", "default") == "marketing/11.default"

    def test_missing_segments_are_empty(self):
        assert item_key("terms", None, "default") == "terms/.default"
        assert item_key("terms", None, None) == "terms/."

    def test_key_set_uses_normalized_access_type(self):
        keys = item_key_set(normalize_items([{"purposeId": "terms"}]))
        assert keys == {"terms/.default"}


# ---------------------------------------------------------------------------
# Record emission
# ---------------------------------------------------------------------------


class TestRecordEmission:

    def test_only_requested_combinations(self, sample_presentation):
        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}], sample_presentation
        )

        assert metadata.eula == []
        assert len(metadata.default) == 1
        record = metadata.default[0]
        assert record.purpose_id == "marketing"
        assert record.purpose_name == "Marketing"
        assert record.attribute_id == "11"
        assert record.attribute_name == "mobile_number"
        assert record.access_type_id == "default"
        assert record.access_type == "Default"
        assert record.legal_category == 4
        assert record.assent_ui_default is True
        assert record.default_consent_duration == 365
        assert record.terms_of_use_ref == "https://example.com/marketing-terms"
        assert record.status == MetadataStatus.NONE
        assert record.consent is None

    def test_attribute_name_alias(self, sample_presentation):
        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "email", "accessTypeId": "read"}],
            sample_presentation,
        )

        assert len(metadata.default) == 1
        record = metadata.default[0]
        assert record.attribute_id == "3"
        assert record.attribute_name == "email"
        assert record.access_type_id == "read"
        assert record.legal_category == 2
        assert record.assent_ui_default is None

    def test_alias_by_display_name(self, sample_presentation):
        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "mobile_number", "accessTypeId": "default"}],
            sample_presentation,
        )

        assert len(metadata.default) == 1
        assert metadata.default[0].attribute_id == "11"
        assert metadata.default[0].attribute_name == "mobile_number"

    def test_id_and_alias_yield_one_record(self, sample_presentation):
        metadata = _normalize(
            [
                {"purposeId": "marketing", "attributeId": "3"},
                {"purposeId": "marketing", "attributeId": "email"},
            ],
            sample_presentation,
        )

        assert len(metadata.default) == 1
        assert metadata.default[0].attribute_id == "3"

    def test_unknown_items_produce_nothing(self, sample_presentation):
        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "99"}, {"purposeId": "unknown"}],
            sample_presentation,
        )

        assert _records(metadata) == []

    def test_eula_purpose_is_bucketed_with_defaults(self, sample_presentation):
        metadata = _normalize([{"purposeId": "terms"}], sample_presentation)

        assert metadata.default == []
        assert len(metadata.eula) == 1
        record = metadata.eula[0]
        assert record.purpose_id == "terms"
        assert record.attribute_id is None
        assert record.attribute_name is None
        assert record.access_type_id == "default"
        assert record.legal_category == 4
        assert record.assent_ui_default is False

    def test_explicit_purpose_level_values_win(self, sample_presentation):
        sample_presentation["purposes"]["terms"]["accessTypes"] = [
            {"id": "default", "legalCategory": 1, "assentUIDefault": True}
        ]

        metadata = _normalize([{"purposeId": "terms"}], sample_presentation)

        assert metadata.eula[0].legal_category == 1
        assert metadata.eula[0].assent_ui_default is True

    def test_purpose_key_used_when_descriptor_has_no_id(self, sample_presentation):
        del sample_presentation["purposes"]["terms"]["id"]

        metadata = _normalize([{"purposeId": "terms"}], sample_presentation)

        assert metadata.eula[0].purpose_id == "terms"

    def test_mixed_request(self, sample_presentation):
        metadata = _normalize(
            [
                {"purposeId": "marketing", "attributeId": "11"},
                {"purposeId": "marketing", "attributeId": "email"},
                {"purposeId": "terms"},
            ],
            sample_presentation,
        )

        assert [r.attribute_id for r in metadata.default] == ["11", "3"]
        assert [r.purpose_id for r in metadata.eula] == ["terms"]

    def test_attribute_with_null_access_types_emits_nothing(self, sample_presentation):
        sample_presentation["purposes"]["marketing"]["attributes"][0]["accessTypes"] = None

        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}, {"purposeId": "marketing", "attributeId": "3"}],
            sample_presentation,
        )

        assert [r.attribute_id for r in metadata.default] == ["3"]

    def test_purposes_as_list(self, sample_presentation):
        sample_presentation["purposes"] = list(sample_presentation["purposes"].values())

        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}, {"purposeId": "terms"}],
            sample_presentation,
        )

        assert len(metadata.default) == 1
        assert len(metadata.eula) == 1


# ---------------------------------------------------------------------------
# Consent reconciliation
# ---------------------------------------------------------------------------


class TestReconciliation:

    @pytest.mark.parametrize(
        "status, expected",
        [(1, MetadataStatus.ACTIVE), (2, MetadataStatus.EXPIRED), (3, MetadataStatus.EXPIRED)],
    )
    def test_status_follows_consent_status(self, sample_presentation, status, expected):
        sample_presentation["consents"] = [make_consent(status=status, state=3)]

        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}], sample_presentation
        )

        record = metadata.default[0]
        assert record.status == expected
        assert record.consent is not None
        assert record.consent.id == "c-1"
        assert record.consent_type == 3

    def test_active_record_is_not_downgraded(self, sample_presentation):
        sample_presentation["consents"] = [
            make_consent(status=1, state=1, consent_id="c-active"),
            make_consent(status=2, state=2, consent_id="c-expired"),
        ]

        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}], sample_presentation
        )

        record = metadata.default[0]
        assert record.status == MetadataStatus.ACTIVE
        assert record.consent.id == "c-active"
        assert record.consent_type == 1

    def test_expired_record_can_become_active(self, sample_presentation):
        sample_presentation["consents"] = [
            make_consent(status=2, consent_id="c-old"),
            make_consent(status=1, consent_id="c-new"),
        ]

        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}], sample_presentation
        )

        assert metadata.default[0].status == MetadataStatus.ACTIVE
        assert metadata.default[0].consent.id == "c-new"

    def test_consent_for_unrequested_item_is_ignored(self, sample_presentation):
        sample_presentation["consents"] = [make_consent(attribute_id="3")]

        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}], sample_presentation
        )

        assert metadata.default[0].status == MetadataStatus.NONE
        assert metadata.default[0].consent is None

    def test_purpose_level_consent(self, sample_presentation):
        sample_presentation["consents"] = [
            make_consent(purpose_id="terms", attribute_id=None, consent_id="c-eula")
        ]

        metadata = _normalize([{"purposeId": "terms"}], sample_presentation)

        assert metadata.eula[0].status == MetadataStatus.ACTIVE
        assert metadata.eula[0].consent.id == "c-eula"

    def test_consent_without_access_type_does_not_match(self, sample_presentation):
        sample_presentation["consents"] = [
            make_consent(purpose_id="terms", attribute_id=None, access_type_id=None)
        ]

        metadata = _normalize([{"purposeId": "terms"}], sample_presentation)

        assert metadata.eula[0].status == MetadataStatus.NONE

    def test_consents_keyed_by_id(self, sample_presentation):
        sample_presentation["consents"] = {"c-1": make_consent()}

        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}], sample_presentation
        )

        assert metadata.default[0].status == MetadataStatus.ACTIVE

    def test_output_serializes_camel_case(self, sample_presentation):
        sample_presentation["consents"] = [make_consent()]

        metadata = _normalize(
            [{"purposeId": "marketing", "attributeId": "11"}], sample_presentation
        )
        payload = metadata.to_dict()["default"][0]

        assert payload["purposeId"] == "marketing"
        assert payload["assentUIDefault"] is True
        assert payload["status"] == "ACTIVE"
        assert payload["consentType"] == 1
        assert payload["consent"]["accessTypeId"] == "default"
