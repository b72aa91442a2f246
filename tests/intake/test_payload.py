"""
Tests for ContactSubmission record and webhook shapes.
"""

from intake.payload import ContactSubmission
from intake.state import IntakeState


def _submission() -> ContactSubmission:
    state = IntakeState()
    state.set_spend(50000)
    state.set_answer("smart_bidding", "yes")
    state.set_answer("performance_target", "no")
    state.set_answer("brand_cpc", "no")
    state.set_answer("match_type", "no")
    return ContactSubmission.from_state(state, "Dana", "dana@example.com")


class TestFromState:

    def test_snapshot(self):
        submission = _submission()
        assert submission.monthly_spend == 50000
        assert submission.estimated_waste.startswith("$")
        assert submission.answers == {
            "smart_bidding": "yes",
            "performance_target": "no",
            "brand_cpc": "no",
            "impression_share": "",
            "match_type": "no",
        }

    def test_snapshot_is_detached_from_state(self):
        state = IntakeState()
        submission = ContactSubmission.from_state(state, "Dana", "dana@example.com")
        state.set_answer("smart_bidding", "yes")
        assert submission.answers["smart_bidding"] == ""


class TestRecord:
    """Record keys are the submissions table columns, unchanged."""

    def test_record_columns(self):
        record = _submission().to_record()
        assert record == {
            "name": "Dana",
            "email": "dana@example.com",
            "monthly_spend": 50000,
            "estimated_waste": record["estimated_waste"],
            "target_impression_share": "yes",
            "incrementality_testing": "no",
            "broad_match": "",
            "search_terms_review": "no",
        }

    def test_performance_target_not_stored(self):
        record = _submission().to_record()
        assert "performance_target" not in record


class TestWebhookPayload:

    def test_nested_answers(self):
        payload = _submission().to_webhook_payload()
        assert payload["name"] == "Dana"
        assert payload["email"] == "dana@example.com"
        assert payload["monthlySpend"] == 50000
        assert payload["estimatedWaste"].startswith("$")
        assert payload["answers"] == {
            "smartBidding": "yes",
            "performanceTarget": "no",
            "brandCpc": "no",
            "impressionShare": "",
            "matchType": "no",
        }

    def test_same_estimate_in_both_shapes(self):
        submission = _submission()
        assert submission.to_record()["estimated_waste"] == submission.to_webhook_payload()["estimatedWaste"]
