"""
Intake Forms.

Question definitions for the calculator page and validation for the
contact form revealed after the last question.
"""

import logging

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator

from brand_savings.errors import IntakeValidationError
from brand_savings.estimator import (
    DEFAULT_MONTHLY_SPEND,
    MAX_MONTHLY_SPEND,
    MIN_MONTHLY_SPEND,
    SPEND_STEP,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Question Definitions
# =============================================================================

YES_NO_OPTIONS = [
    {"value": "yes", "label": "Yes"},
    {"value": "no", "label": "No"},
]

MATCH_TYPE_OPTIONS = [
    {"value": "yes", "label": "Broad Match"},
    {"value": "no", "label": "Exact/Phrase Match"},
]

QUESTIONS = [
    {
        "id": "smart_bidding",
        "label": "Are you using a smart bidding strategy? (tROAS, tCPA, Max Conversions, etc)",
        "options": YES_NO_OPTIONS,
    },
    {
        "id": "performance_target",
        "label": "Is your performance better than your target?",
        "options": YES_NO_OPTIONS,
        # Only shown once smart bidding is answered "yes"
        "depends_on": {"question": "smart_bidding", "value": "yes"},
    },
    {
        "id": "brand_cpc",
        "label": "Is your brand CPC higher than or within 25% of your nonbrand CPC?",
        "options": YES_NO_OPTIONS,
    },
    {
        "id": "impression_share",
        "label": "Is your search impression share above 90%?",
        "options": YES_NO_OPTIONS,
    },
    {
        "id": "match_type",
        "label": "What match type are you predominantly using for your brand search campaign?",
        "options": MATCH_TYPE_OPTIONS,
        "is_last_question": True,
    },
]


def get_form_options() -> dict:
    """Everything the page needs to render the questionnaire."""
    return {
        "spend": {
            "min": MIN_MONTHLY_SPEND,
            "max": MAX_MONTHLY_SPEND,
            "step": SPEND_STEP,
            "default": DEFAULT_MONTHLY_SPEND,
        },
        "questions": QUESTIONS,
    }


# =============================================================================
# Contact Form
# =============================================================================

class ContactForm(BaseModel):
    """Contact details collected once the form is revealed."""

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


def validate_contact(name: str, email: str) -> ContactForm:
    """
    Validate contact inputs.

    Raises IntakeValidationError with the first problem found.
    """
    try:
        return ContactForm(name=name, email=email)
    except ValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"]) or "contact"
        logger.debug(f"Contact form rejected: {e}")
        raise IntakeValidationError(f"{field_name}: {first['msg']}") from e


def is_contact_valid(name: str, email: str) -> bool:
    try:
        validate_contact(name, email)
    except IntakeValidationError:
        return False
    return True
