"""File-backed key-value store.

Each key is stored as ``<key>.json`` under ``base_path``; the value is the
raw string the caller hands in (the file store already serializes to JSON).
"""

from __future__ import annotations

from pathlib import Path

from actionkit.kernel.exceptions import StorageError
from actionkit.kernel.logging import get_logger

logger = get_logger(__name__)


class JsonFileKeyValueStore:
    """Key-value store backed by one file per key.

    Parameters
    ----------
    base_path : str | Path
        Directory holding the key files
    create_dirs : bool, default=True
        Create ``base_path`` if it doesn't exist

    Examples
    --------
    Example usage::

        storage = JsonFileKeyValueStore(base_path="./.actionkit")
        files = FilesStore(storage=storage)
        await files.asetup()
    """

    def __init__(self, base_path: str | Path = "./.actionkit", create_dirs: bool = True) -> None:
        self.base_path = Path(base_path)
        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)
            logger.debug("Initialized key-value storage at '{path}'", path=self.base_path)

    def _get_file_path(self, key: str) -> Path:
        if not key:
            raise StorageError(key, "key cannot be empty")
        safe_key = key.replace("/", "_").replace(":", "_")
        return self.base_path / f"{safe_key}.json"

    async def aget(self, key: str) -> str | None:
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return None
        try:
            return file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(key, f"cannot read {file_path}: {e}") from e

    async def aset(self, key: str, value: str) -> None:
        file_path = self._get_file_path(key)
        try:
            file_path.write_text(value, encoding="utf-8")
        except OSError as e:
            raise StorageError(key, f"cannot write {file_path}: {e}") from e

    async def adelete(self, key: str) -> bool:
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return False
        try:
            file_path.unlink()
        except OSError as e:
            raise StorageError(key, f"cannot delete {file_path}: {e}") from e
        return True


__all__ = ["JsonFileKeyValueStore"]
