"""
Intake Controller.

Drives one session through the questionnaire and the two-step submission:

    COLLECTING -> REVEALED -> SUBMITTING -> SUBMITTED
                     ^             |
                     +-- failure --+

The record store is always written first. The webhook is only called
after a successful write, and a webhook failure does not undo the write.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from brand_savings.errors import (
    IntakeValidationError,
    RecordStoreError,
    SubmissionInProgressError,
    WebhookError,
)
from brand_savings.sinks import RecordStore, WebhookSink

from .forms import is_contact_valid, validate_contact
from .payload import SUBMISSIONS_COLLECTION, ContactSubmission
from .state import IntakePhase, IntakeState

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "There was an error submitting your request. Please try again."

StepName = Literal["record_store", "webhook"]
StepStatus = Literal["ok", "error", "skipped"]


@dataclass
class StepResult:
    """Outcome of one sink call."""
    step: StepName
    status: StepStatus
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass
class SubmissionOutcome:
    """Tagged result of a whole submit attempt."""
    success: bool
    steps: list[StepResult] = field(default_factory=list)
    message: str = ""

    def step(self, name: StepName) -> StepResult | None:
        for result in self.steps:
            if result.step == name:
                return result
        return None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "steps": [
                {"step": s.step, "status": s.status, "error": s.error}
                for s in self.steps
            ],
        }


class IntakeController:
    """
    Owns an IntakeState and the two sinks.

    All mutations go through here so the phase rules stay in one place.
    """

    def __init__(
        self,
        record_store: RecordStore,
        webhook: WebhookSink,
        state: IntakeState | None = None,
        collection: str = SUBMISSIONS_COLLECTION,
    ):
        self.record_store = record_store
        self.webhook = webhook
        self.state = state or IntakeState()
        self.collection = collection

    # -------------------------------------------------------------------------
    # Questionnaire
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> IntakePhase:
        return self.state.phase

    @property
    def estimated_waste(self) -> str:
        return self.state.estimated_waste

    def set_spend(self, amount: int) -> str:
        self.state.set_spend(amount)
        return self.state.estimated_waste

    def answer(self, question: str, value: Any) -> str:
        """Record an answer and return the refreshed estimate."""
        before = self.state.phase
        self.state.set_answer(question, value)
        if self.state.phase != before:
            logger.debug(f"Intake phase {before.value} -> {self.state.phase.value}")
        return self.state.estimated_waste

    # -------------------------------------------------------------------------
    # Contact form
    # -------------------------------------------------------------------------

    def update_contact(self, name: str | None = None, email: str | None = None) -> None:
        if name is not None:
            self.state.name = name
        if email is not None:
            self.state.email = email

    @property
    def can_submit(self) -> bool:
        return (
            self.state.phase == IntakePhase.REVEALED
            and is_contact_valid(self.state.name, self.state.email)
        )

    def _check_can_submit(self) -> ContactSubmission:
        phase = self.state.phase
        if phase == IntakePhase.SUBMITTING:
            raise SubmissionInProgressError("A submission is already in progress")
        if phase == IntakePhase.COLLECTING:
            raise IntakeValidationError("Answer the last question before submitting")
        if phase == IntakePhase.SUBMITTED:
            raise IntakeValidationError("This request has already been submitted")

        contact = validate_contact(self.state.name, self.state.email)
        # Submit the address as typed; EmailStr lowercases the domain
        return ContactSubmission.from_state(self.state, contact.name, self.state.email.strip())

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    async def submit(self) -> SubmissionOutcome:
        """
        Run the two-step submission.

        Validation problems raise before any sink is called. Sink failures
        are returned as a failed outcome with the generic message; the
        contact inputs are kept so the user can try again.
        """
        submission = self._check_can_submit()

        self.state.phase = IntakePhase.SUBMITTING
        self.state.error = None
        steps: list[StepResult] = []

        try:
            try:
                await self.record_store.write(self.collection, submission.to_record())
            except RecordStoreError as e:
                logger.exception("Submission error: record store write failed")
                steps.append(StepResult("record_store", "error", str(e)))
                steps.append(StepResult("webhook", "skipped"))
                return self._fail(steps)
            steps.append(StepResult("record_store", "ok"))

            try:
                await self.webhook.notify(submission.to_webhook_payload())
            except WebhookError as e:
                logger.exception("Submission error: webhook notify failed")
                logger.warning(
                    f"Submission for {submission.email} stored without webhook notification"
                )
                steps.append(StepResult("webhook", "error", str(e)))
                return self._fail(steps)
            steps.append(StepResult("webhook", "ok"))
            return self._succeed(submission, steps)
        finally:
            # Cancelled mid-flight: leave the session usable
            if self.state.phase == IntakePhase.SUBMITTING:
                self.state.phase = IntakePhase.REVEALED

    def _fail(self, steps: list[StepResult]) -> SubmissionOutcome:
        self.state.phase = IntakePhase.REVEALED
        self.state.error = GENERIC_ERROR_MESSAGE
        return SubmissionOutcome(success=False, steps=steps, message=GENERIC_ERROR_MESSAGE)

    def _succeed(self, submission: ContactSubmission, steps: list[StepResult]) -> SubmissionOutcome:
        self.state.phase = IntakePhase.SUBMITTED
        self.state.confirmation_email = submission.email
        self.state.clear_contact()
        logger.info(f"Submission complete for {submission.email} ({submission.estimated_waste})")
        return SubmissionOutcome(
            success=True,
            steps=steps,
            message=(
                "We've received your information and will send your personalized "
                f"savings estimate to {submission.email} shortly."
            ),
        )
