"""
Intake State Management.

Tracks the questionnaire, the live estimate, the contact inputs, and the
phase of the submission flow for one session.

The estimate is kept current by the setters: any change to a tracked
questionnaire field recomputes it synchronously before returning.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from brand_savings.errors import IntakeValidationError
from brand_savings.estimator import (
    TRACKED_FIELDS,
    Answer,
    MatchType,
    QuestionnaireInput,
    estimate,
    validate_monthly_spend,
)


class IntakePhase(Enum):
    """Submission flow phases."""
    COLLECTING = "collecting"    # Questions only, contact form hidden
    REVEALED = "revealed"        # Contact form visible, ready to submit
    SUBMITTING = "submitting"    # Sinks in flight, submit disabled
    SUBMITTED = "submitted"      # Done, confirmation shown


# Question id -> (QuestionnaireInput field, answer type)
QUESTION_FIELDS: dict[str, tuple[str, type[Enum]]] = {
    "smart_bidding": ("uses_smart_bidding", Answer),
    "performance_target": ("beats_performance_target", Answer),
    "brand_cpc": ("brand_cpc_near_nonbrand", Answer),
    "impression_share": ("high_impression_share", Answer),
    "match_type": ("match_type_predominant", MatchType),
}

# Answering this question reveals the contact form
LAST_QUESTION = "match_type"


def parse_answer(question: str, value: Any) -> Enum:
    """Resolve a question id and raw value to the question's answer enum."""
    if question not in QUESTION_FIELDS:
        raise IntakeValidationError(f"Unknown question: {question!r}")

    _, answer_type = QUESTION_FIELDS[question]
    if isinstance(value, answer_type):
        return value
    if isinstance(value, str):
        if value in [m.value for m in answer_type]:
            return answer_type(value)
        # Also accept member names, e.g. "broad" or "exact_or_phrase"
        if value.upper() in answer_type.__members__:
            return answer_type[value.upper()]

    valid = ", ".join(repr(m.value) for m in answer_type)
    raise IntakeValidationError(
        f"Invalid answer {value!r} for {question}; expected one of {valid}"
    )


@dataclass
class IntakeState:
    """
    Main intake session state.

    Lives for the whole browser session. Nothing here is persisted;
    only completed submissions reach the record store.
    """
    questionnaire: QuestionnaireInput = field(default_factory=QuestionnaireInput)
    phase: IntakePhase = IntakePhase.COLLECTING
    estimated_waste: str = ""
    form_visible: bool = False

    # Contact form inputs
    name: str = ""
    email: str = ""

    # Presentation
    error: str | None = None
    confirmation_email: str | None = None

    # Metadata
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self):
        """Set timestamps and the initial estimate."""
        now = datetime.utcnow().isoformat()
        if not self.created_at:
            self.created_at = now
        if not self.updated_at:
            self.updated_at = now
        self.recompute()

    def recompute(self) -> str:
        self.estimated_waste = estimate(self.questionnaire)
        return self.estimated_waste

    def _touch(self) -> None:
        self.updated_at = datetime.utcnow().isoformat()

    def _set_field(self, name: str, value: Any) -> None:
        setattr(self.questionnaire, name, value)
        if name in TRACKED_FIELDS:
            self.recompute()
        self._touch()

    def set_spend(self, amount: int) -> None:
        self._set_field("monthly_spend", validate_monthly_spend(amount))

    def set_answer(self, question: str, value: Any) -> None:
        """
        Record an answer by question id.

        Answering the last question reveals the contact form. The reveal
        is one-way and does not depend on the other answers.
        """
        answer = parse_answer(question, value)
        field_name, _ = QUESTION_FIELDS[question]
        self._set_field(field_name, answer)

        if question == LAST_QUESTION and answer != MatchType.UNANSWERED and not self.form_visible:
            self.form_visible = True
            if self.phase == IntakePhase.COLLECTING:
                self.phase = IntakePhase.REVEALED

    def clear_contact(self) -> None:
        self.name = ""
        self.email = ""
        self._touch()

    def to_dict(self) -> dict:
        """Serialize for API responses."""
        return {
            "phase": self.phase.value,
            "monthly_spend": self.questionnaire.monthly_spend,
            "answers": self.questionnaire.answers(),
            "estimated_waste": self.estimated_waste,
            "form_visible": self.form_visible,
            "name": self.name,
            "email": self.email,
            "error": self.error,
            "confirmation_email": self.confirmation_email,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
