"""
Shared fixtures.

Tests never touch the real configured backend: every component is
built on an in-memory store with explicit defaults.
"""

import json
from typing import Optional

import pytest

from salary_tracker.accounts import AccountDirectory
from salary_tracker.audit import AuditLogger
from salary_tracker.models import TaxRates
from salary_tracker.repository import EarningsRepository
from salary_tracker.services.storage import (
    KeyValueStorageInterface,
    MemoryKeyValueStore,
    StorageError,
)
from salary_tracker.validation import EarningsValidator


class FailingKeyValueStore(KeyValueStorageInterface):
    """Backend whose every operation raises."""

    async def _read(self, full_key: str) -> Optional[str]:
        raise StorageError("backend unavailable")

    async def _write(self, full_key: str, value: str) -> None:
        raise StorageError("backend unavailable")

    async def _delete(self, full_key: str) -> None:
        raise StorageError("backend unavailable")


@pytest.fixture
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def validator() -> EarningsValidator:
    return EarningsValidator(min_password_length=4)


@pytest.fixture
def repository(storage, validator) -> EarningsRepository:
    return EarningsRepository(
        storage,
        default_tax_rates=TaxRates(tax=10, retirement=10, insurance=5),
        validator=validator,
        audit_logger=AuditLogger(),
    )


@pytest.fixture
def accounts(storage, validator) -> AccountDirectory:
    return AccountDirectory(storage, validator=validator, audit_logger=AuditLogger())


def stored_json(store: MemoryKeyValueStore, key: str):
    """Decode the raw value stored under ``key``."""
    return json.loads(store.raw[key])
