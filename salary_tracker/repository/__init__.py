"""Earnings persistence package."""

from salary_tracker.repository.earnings import EarningsRepository

__all__ = ["EarningsRepository"]
