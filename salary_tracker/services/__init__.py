"""Services package."""

from salary_tracker.services.storage import (
    JsonFileKeyValueStore,
    KeyValueStorageInterface,
    MemoryKeyValueStore,
    StorageConnectionError,
    StorageError,
    create_storage,
)

__all__ = [
    "JsonFileKeyValueStore",
    "KeyValueStorageInterface",
    "MemoryKeyValueStore",
    "StorageConnectionError",
    "StorageError",
    "create_storage",
]
