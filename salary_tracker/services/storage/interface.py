"""
Abstract Key-Value Storage Interface

DESIGN DECISION: The core only needs get/set/remove of string values
keyed by string. Keeping the interface this small lets us:
1. Swap the on-device JSON file for Google Sheets (or anything else)
2. Use in-memory storage for testing
3. Keep the repository decoupled from any backend

Failure contract: backends implement the raising primitives
(_read/_write/_delete). The public methods never raise; a failed read
is reported as ``None`` (absent) and a failed write/remove as ``False``.
Callers see the fallback in the return type instead of relying on an
exception being caught somewhere.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog


logger = structlog.get_logger(__name__)


class StorageError(Exception):
    """Base exception for storage backend operations."""
    pass


class StorageConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for namespaced key-value storage.

    Every key is prefixed with ``namespace`` before it reaches the
    backend, so web ("") and native ("@") layouts can share one backend.
    """

    def __init__(self, namespace: str = ""):
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def full_key(self, key: str) -> str:
        return f"{self._namespace}{key}"

    # -------------------------------------------------------------------------
    # Backend primitives (may raise)
    # -------------------------------------------------------------------------

    @abstractmethod
    async def _read(self, full_key: str) -> Optional[str]:
        """
        Read the raw value stored under a fully-qualified key.

        Returns:
            The value, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def _write(self, full_key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass

    @abstractmethod
    async def _delete(self, full_key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass

    # -------------------------------------------------------------------------
    # Public contract (never raises)
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> Optional[str]:
        """Value under ``key``, or None if absent or unreadable."""
        full_key = self.full_key(key)
        try:
            return await self._read(full_key)
        except Exception as e:
            logger.warning("storage_read_failed", key=full_key, error=str(e))
            return None

    async def set(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``. Returns False if the write was dropped."""
        full_key = self.full_key(key)
        try:
            await self._write(full_key, value)
            return True
        except Exception as e:
            logger.warning("storage_write_failed", key=full_key, error=str(e))
            return False

    async def remove(self, key: str) -> bool:
        """Remove ``key``. Returns False if the removal was dropped."""
        full_key = self.full_key(key)
        try:
            await self._delete(full_key)
            return True
        except Exception as e:
            logger.warning("storage_remove_failed", key=full_key, error=str(e))
            return False
