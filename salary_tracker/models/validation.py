"""
Validation report models.

A validation run collects every issue it finds rather than stopping at
the first one; the caller decides what to show. Only error-severity
issues block an operation.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'out_of_range', 'duplicate')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one piece of user input."""

    validated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return bool(self.errors)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return len(self.errors)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def first_error_message(self) -> Optional[str]:
        errors = self.errors
        return errors[0].message if errors else None
