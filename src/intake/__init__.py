"""
Brand Savings Intake.

Questionnaire flow for the calculator page. Collects the five answers,
reveals the contact form after the last one, and submits the lead to the
record store and then the automation webhook.

Phases:
1. Collecting - questions answered in any order, live estimate
2. Revealed - contact form visible
3. Submitting - record store write, then webhook
4. Submitted - confirmation shown, contact inputs cleared
"""

from .state import IntakeState, IntakePhase
from .payload import ContactSubmission
from .controller import IntakeController, SubmissionOutcome, StepResult

__all__ = [
    "IntakeState",
    "IntakePhase",
    "ContactSubmission",
    "IntakeController",
    "SubmissionOutcome",
    "StepResult",
]
