"""
Input Validation

Every user-supplied value is checked here before anything is persisted:
- Daily earnings: a real calendar date, a strictly positive amount,
  at most one entry per date per owner
- Employees: a non-empty name, unique per company (case-insensitive)
- Tax rates: each percentage within [0, 100]
- Registrations: required names, minimum password length, unique
  username (case-sensitive)

IMPORTANT: Validation NEVER silently fixes issues. It reports them; the
caller raises ValidationError and nothing is written.
"""

import math
import re
from datetime import date
from typing import Any, Optional, Sequence, Union

from salary_tracker.models import (
    DailyEarning,
    Employee,
    TaxRates,
    User,
    UserRole,
    ValidationIssue,
    ValidationResult,
)


AmountInput = Union[float, int, str]
DateInput = Union[date, str]

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

RATE_LABELS = {
    "tax": "Tax rate",
    "retirement": "Retirement rate",
    "insurance": "Insurance rate",
}


def coerce_amount(amount: Any) -> Optional[float]:
    """Parse an amount as typed by the user; None if it is not a finite number."""
    if isinstance(amount, bool):
        return None
    if isinstance(amount, str):
        amount = amount.strip()
        if not amount:
            return None
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def coerce_date(day: Any) -> Optional[date]:
    """Parse an ISO calendar date (YYYY-MM-DD); None if it is not one."""
    if isinstance(day, date):
        return day
    if isinstance(day, str):
        day = day.strip()
        # fromisoformat alone also takes basic and week forms (20240101, 2024-W01-1)
        if not ISO_DATE_PATTERN.fullmatch(day):
            return None
        try:
            return date.fromisoformat(day)
        except ValueError:
            return None
    return None


class EarningsValidator:
    """
    Validates user input for earnings, employees, tax rates and accounts.

    All methods are pure: the existing collection to check against is
    passed in by the caller.
    """

    def __init__(self, min_password_length: int = 4):
        self._min_password_length = min_password_length

    def validate_earning(
        self,
        existing: Sequence[DailyEarning],
        day: DateInput,
        amount: AmountInput,
    ) -> ValidationResult:
        """
        Check a new daily earning against its owner's collection.

        Checks:
        - Amount is a number
        - Amount is greater than zero
        - Date is a valid ISO calendar date
        - No entry already exists for that date
        """
        issues = []

        value = coerce_amount(amount)
        if value is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Enter a valid amount",
            ))
        elif value <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message="Amount must be greater than zero",
            ))

        parsed_day = coerce_date(day)
        if parsed_day is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date must be in YYYY-MM-DD format (got {day!r})",
            ))
        elif any(e.earning_date == parsed_day for e in existing):
            issues.append(ValidationIssue(
                field="date",
                issue_type="duplicate",
                message=f"An earning has already been entered for {parsed_day.isoformat()}",
            ))

        return ValidationResult(issues=issues)

    def validate_employee_name(
        self,
        existing: Sequence[Employee],
        name: str,
    ) -> ValidationResult:
        """Check a new employee name against the company's employees."""
        issues = []
        candidate = (name or "").strip()

        if not candidate:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Employee name is required",
            ))
        elif any(emp.name.strip().lower() == candidate.lower() for emp in existing):
            issues.append(ValidationIssue(
                field="name",
                issue_type="duplicate",
                message=f"An employee named {candidate} already exists",
            ))

        return ValidationResult(issues=issues)

    def validate_tax_rates(self, rates: Union[TaxRates, dict]) -> ValidationResult:
        """Each rate must be a number within [0, 100]."""
        values = rates.model_dump() if isinstance(rates, TaxRates) else dict(rates)
        issues = []

        for field, label in RATE_LABELS.items():
            value = coerce_amount(values.get(field))
            if value is None:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="invalid_format",
                    message=f"{label} must be a number",
                ))
            elif value < 0 or value > 100:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="out_of_range",
                    message=f"{label} must be between 0 and 100",
                ))

        return ValidationResult(issues=issues)

    def validate_registration(
        self,
        existing: Sequence[User],
        first_name: str,
        last_name: str,
        username: str,
        password: str,
        role: Any = UserRole.INDIVIDUAL,
    ) -> ValidationResult:
        """
        Check a registration form.

        The username uniqueness check is an exact, case-sensitive match,
        and only runs once the form itself is well-formed.
        """
        issues = []

        if not (first_name or "").strip():
            issues.append(ValidationIssue(
                field="first_name",
                issue_type="missing",
                message="First name is required",
            ))
        if not (last_name or "").strip():
            issues.append(ValidationIssue(
                field="last_name",
                issue_type="missing",
                message="Last name is required",
            ))
        if not (username or "").strip():
            issues.append(ValidationIssue(
                field="username",
                issue_type="missing",
                message="Username is required",
            ))
        if len(password or "") < self._min_password_length:
            issues.append(ValidationIssue(
                field="password",
                issue_type="too_short",
                message=f"Password must be at least {self._min_password_length} characters",
            ))
        try:
            UserRole(role)
        except ValueError:
            issues.append(ValidationIssue(
                field="role",
                issue_type="invalid_value",
                message="Account type must be individual or company",
            ))

        if not issues and any(user.username == username for user in existing):
            issues.append(ValidationIssue(
                field="username",
                issue_type="duplicate",
                message="This username is already taken",
            ))

        return ValidationResult(issues=issues)

    @staticmethod
    def get_user_friendly_summary(result: ValidationResult) -> str:
        """One line per blocking issue, for showing to the user."""
        if result.is_valid:
            return "All checks passed."
        return "\n".join(f"• {issue.message}" for issue in result.errors)
