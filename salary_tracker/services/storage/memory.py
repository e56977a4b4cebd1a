"""In-process key-value storage. Used by tests and throwaway sessions."""

from typing import Optional

from salary_tracker.services.storage.interface import KeyValueStorageInterface


class MemoryKeyValueStore(KeyValueStorageInterface):
    """Keeps values in a dict; nothing survives the process."""

    def __init__(self, namespace: str = "", initial: Optional[dict[str, str]] = None):
        super().__init__(namespace)
        self._data: dict[str, str] = dict(initial or {})

    @property
    def raw(self) -> dict[str, str]:
        """Backing dict keyed by fully-qualified keys."""
        return self._data

    async def _read(self, full_key: str) -> Optional[str]:
        return self._data.get(full_key)

    async def _write(self, full_key: str, value: str) -> None:
        self._data[full_key] = value

    async def _delete(self, full_key: str) -> None:
        self._data.pop(full_key, None)
