"""
Brand Savings - Error taxonomy.

Validation errors are raised before any sink is touched.
Sink errors are raised by the record store and the webhook and are
collapsed into one user-facing message by the intake controller.
"""


class BrandSavingsError(Exception):
    """Base class for all calculator errors."""


class IntakeValidationError(BrandSavingsError, ValueError):
    """Input rejected locally (bad spend, unknown answer, invalid contact)."""


class SubmissionInProgressError(BrandSavingsError):
    """A submit was attempted while another one is still in flight."""


class SinkError(BrandSavingsError):
    """An external sink failed."""


class RecordStoreError(SinkError):
    """The record-store write failed."""


class WebhookError(SinkError):
    """The webhook call failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
