"""
Unit tests for the assessment reducer.
"""

from typing import Any

import pytest

from verify_privacy.schemas.assessment import AssessmentResult
from verify_privacy.services.assessmentReducer import (
    NO_CONSENT_FOUND_CODE,
    reduce_assessment,
)


def _approved() -> dict[str, Any]:
    return {"purposeId": "p", "result": [{"approved": True}]}


def _needs_consent() -> dict[str, Any]:
    return {
        "purposeId": "p",
        "result": [
            {
                "approved": False,
                "reason": {
                    "messageId": NO_CONSENT_FOUND_CODE,
                    "messageDescription": "No consent found.",
                },
            }
        ],
    }


def _denied() -> dict[str, Any]:
    return {
        "purposeId": "p",
        "result": [{"approved": False, "reason": {"messageId": "CSIBT0038E"}}],
    }


def _reduce(*entries: dict[str, Any]) -> str:
    return reduce_assessment(AssessmentResult.model_validate(e) for e in entries)


class TestReduceAssessment:

    def test_all_approved(self):
        assert _reduce(_approved(), _approved()) == "approved"

    def test_consent_overrides_approved(self):
        assert _reduce(_approved(), _needs_consent()) == "consent"

    def test_approved_does_not_override_consent(self):
        assert _reduce(_needs_consent(), _approved()) == "consent"

    def test_denial_has_no_effect(self):
        assert _reduce(_approved(), _denied()) == "approved"
        assert _reduce(_denied(), _needs_consent()) == "consent"

    def test_only_denials(self):
        assert _reduce(_denied(), _denied()) == "denied"

    def test_empty_assessment_is_denied(self):
        assert _reduce() == "denied"

    @pytest.mark.parametrize("result", [None, []])
    def test_items_without_decision_are_skipped(self, result):
        assert _reduce({"purposeId": "p", "result": result}, _approved()) == "approved"

    def test_single_decision_object(self):
        entry = {"purposeId": "p", "result": {"approved": True}}
        assert _reduce(entry) == "approved"

    def test_only_first_decision_counts(self):
        entry = {
            "purposeId": "p",
            "result": [
                {"approved": False, "reason": {"messageId": "CSIBT0038E"}},
                {"approved": True},
            ],
        }
        assert _reduce(entry) == "denied"

    def test_denial_without_reason(self):
        assert _reduce({"purposeId": "p", "result": [{"approved": False}]}) == "denied"
