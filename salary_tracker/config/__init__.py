"""Configuration package."""

from salary_tracker.config.settings import (
    AccountSettings,
    GoogleSheetsSettings,
    Settings,
    StorageSettings,
    TaxDefaultsSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AccountSettings",
    "GoogleSheetsSettings",
    "Settings",
    "StorageSettings",
    "TaxDefaultsSettings",
    "get_settings",
    "validate_all_settings",
]
