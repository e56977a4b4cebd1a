"""
Domain exceptions.

Every rejection the caller can receive is one of these. Each carries a
human-readable ``message`` suitable for showing to the user directly.
Storage failures are NOT in this module: they never leave the storage
boundary (see ``salary_tracker.services.storage.interface``).
"""

from typing import Optional

from salary_tracker.models.validation import ValidationResult


class SalaryTrackerError(Exception):
    """Base exception for all rejections surfaced to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SalaryTrackerError):
    """
    User input failed validation.

    Empty required field, out-of-range percentage, non-positive amount,
    duplicate date/username/employee name. Nothing was persisted.
    """

    def __init__(self, result: ValidationResult):
        super().__init__(result.first_error_message or "Invalid input")
        self.result = result

    @property
    def issues(self):
        return self.result.issues

    @property
    def field(self) -> Optional[str]:
        errors = self.result.errors
        return errors[0].field if errors else None


class NotFoundError(SalaryTrackerError):
    """A user list or employee that the operation needs does not exist."""
    pass


class InvalidCredentialsError(SalaryTrackerError):
    """No stored user matches the given username and password."""
    pass


class NotAuthenticatedError(SalaryTrackerError):
    """The operation needs a signed-in session."""
    pass
