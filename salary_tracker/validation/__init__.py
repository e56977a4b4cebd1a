"""Input validation package."""

from salary_tracker.validation.validator import (
    EarningsValidator,
    coerce_amount,
    coerce_date,
)

__all__ = ["EarningsValidator", "coerce_amount", "coerce_date"]
