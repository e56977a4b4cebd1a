"""
Storage Services Package

Provides the abstract key-value interface and interchangeable backends:
in-memory, a JSON document on disk, and Google Sheets.
"""

from typing import Optional

from salary_tracker.config import StorageSettings, get_settings
from salary_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageConnectionError,
    StorageError,
)
from salary_tracker.services.storage.memory import MemoryKeyValueStore
from salary_tracker.services.storage.json_file import JsonFileKeyValueStore


def create_storage(settings: Optional[StorageSettings] = None) -> KeyValueStorageInterface:
    """Build the backend selected by ``STORAGE_BACKEND``."""
    settings = settings or get_settings().storage
    namespace = settings.key_namespace

    if settings.backend == "memory":
        return MemoryKeyValueStore(namespace=namespace)
    if settings.backend == "google_sheets":
        # Imported lazily so gspread/google-auth are only loaded when selected
        from salary_tracker.services.storage.google_sheets import GoogleSheetsKeyValueStore
        return GoogleSheetsKeyValueStore(namespace=namespace)
    return JsonFileKeyValueStore(settings.file_path, namespace=namespace)


__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "StorageConnectionError",
    "StorageError",
    # Backends
    "JsonFileKeyValueStore",
    "MemoryKeyValueStore",
    # Factory
    "create_storage",
]
