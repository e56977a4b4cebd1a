"""
JSON File Storage Implementation

Stores the whole key-value map as a single JSON object on disk. This is
the device-local backend: one file per installation, rewritten on every
change.

TRADEOFFS:
- Every write rewrites the file (fine for a handful of small keys)
- No locking; a single writer is assumed
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from salary_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)


class JsonFileKeyValueStore(KeyValueStorageInterface):
    """Key-value storage backed by one JSON document."""

    def __init__(self, path: Union[str, Path], namespace: str = ""):
        super().__init__(namespace)
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load_document(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read {self._path}: {e}")
        if not isinstance(document, dict):
            raise StorageError(f"Storage file {self._path} does not hold a JSON object")
        return document

    def _dump_document(self, document: dict[str, str]) -> None:
        # Write to a sibling temp file first so a crash never leaves half a document
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            Path(tmp_path).unlink(missing_ok=True)
            raise StorageError(f"Failed to write {self._path}: {e}")

    async def _read(self, full_key: str) -> Optional[str]:
        value = self._load_document().get(full_key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value under {full_key} is not a string")
        return value

    async def _write(self, full_key: str, value: str) -> None:
        document = self._load_document()
        document[full_key] = value
        self._dump_document(document)

    async def _delete(self, full_key: str) -> None:
        document = self._load_document()
        if full_key in document:
            del document[full_key]
            self._dump_document(document)
