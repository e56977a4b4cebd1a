"""Accounts package."""

from salary_tracker.accounts.directory import AccountDirectory

__all__ = ["AccountDirectory"]
