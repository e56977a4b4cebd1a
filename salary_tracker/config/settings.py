"""
Configuration Management for Salary Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage backend selection, the default deduction rates and the account
rules are all visible in one place and validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value storage backend configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["memory", "json_file", "google_sheets"] = Field(
        default="json_file",
        description="Which key-value backend to use"
    )
    platform: Literal["web", "native"] = Field(
        default="web",
        description="Platform namespace; native keys are prefixed with '@'"
    )
    file_path: str = Field(
        default="salary_tracker_data.json",
        description="Path of the JSON document used by the json_file backend"
    )

    @property
    def key_namespace(self) -> str:
        """Prefix applied to every storage key."""
        return "@" if self.platform == "native" else ""


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets key-value backend configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )
    worksheet_name: str = Field(
        default="KeyValue",
        description="Name of the two-column key/value worksheet"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v


class TaxDefaultsSettings(BaseSettings):
    """
    Deduction rates used until the user saves their own.

    Each value is a percentage of gross salary.
    """

    model_config = SettingsConfigDict(
        env_prefix="SALARY_DEFAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    tax: float = Field(default=10.0, ge=0.0, le=100.0)
    retirement: float = Field(default=10.0, ge=0.0, le=100.0)
    insurance: float = Field(default=5.0, ge=0.0, le=100.0)


class AccountSettings(BaseSettings):
    """Registration rules."""

    model_config = SettingsConfigDict(
        env_prefix="SALARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    min_password_length: int = Field(
        default=4,
        ge=1,
        description="Minimum number of characters in a password"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily so a missing Google Sheets
    # configuration only matters when that backend is selected.

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def tax_defaults(self) -> TaxDefaultsSettings:
        return TaxDefaultsSettings()

    @property
    def accounts(self) -> AccountSettings:
        return AccountSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    ``<name>_error`` entry for every section that failed.
    Google Sheets settings are only checked when that backend is selected.
    """
    results = {}
    settings = get_settings()

    sections = {
        "storage": lambda: settings.storage,
        "tax_defaults": lambda: settings.tax_defaults,
        "accounts": lambda: settings.accounts,
        "google_sheets": lambda: settings.google_sheets,
    }

    for name, load in sections.items():
        if name == "google_sheets" and not (
            results["storage"] and settings.storage.backend == "google_sheets"
        ):
            continue
        try:
            load()
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
