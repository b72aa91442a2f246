"""
Intake Payload Definition.

ContactSubmission is built fresh for every submit attempt. It renders to
two shapes: the flat record stored in the submissions table and the
nested body sent to the webhook.
"""

from dataclasses import dataclass, field

from .state import IntakeState

SUBMISSIONS_COLLECTION = "submissions"

# Question id -> record column.
# The column names predate the current questions and do not describe them
# (match type lands in "search_terms_review"). Downstream reports read these
# columns, so they are kept as-is.
RECORD_ANSWER_COLUMNS = {
    "smart_bidding": "target_impression_share",
    "brand_cpc": "incrementality_testing",
    "impression_share": "broad_match",
    "match_type": "search_terms_review",
}

# Question id -> key inside the webhook "answers" object
WEBHOOK_ANSWER_KEYS = {
    "smart_bidding": "smartBidding",
    "performance_target": "performanceTarget",
    "brand_cpc": "brandCpc",
    "impression_share": "impressionShare",
    "match_type": "matchType",
}


@dataclass
class ContactSubmission:
    """One submit attempt: contact details plus a snapshot of the answers."""
    name: str
    email: str
    monthly_spend: int
    estimated_waste: str
    answers: dict[str, str] = field(default_factory=dict)  # Wire values by question id

    @classmethod
    def from_state(cls, state: IntakeState, name: str, email: str) -> "ContactSubmission":
        return cls(
            name=name,
            email=email,
            monthly_spend=state.questionnaire.monthly_spend,
            estimated_waste=state.estimated_waste,
            answers=state.questionnaire.answers(),
        )

    def to_record(self) -> dict:
        """Row for the submissions table."""
        record = {
            "name": self.name,
            "email": self.email,
            "monthly_spend": self.monthly_spend,
            "estimated_waste": self.estimated_waste,
        }
        for question, column in RECORD_ANSWER_COLUMNS.items():
            record[column] = self.answers.get(question, "")
        return record

    def to_webhook_payload(self) -> dict:
        """JSON body for the automation webhook."""
        return {
            "name": self.name,
            "email": self.email,
            "monthlySpend": self.monthly_spend,
            "estimatedWaste": self.estimated_waste,
            "answers": {
                key: self.answers.get(question, "")
                for question, key in WEBHOOK_ANSWER_KEYS.items()
            },
        }
