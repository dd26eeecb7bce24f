"""Virtual file store.

Keeps a flat mapping from absolute workspace path to :class:`File` or
:class:`Folder` entries, mirrored to an optional key-value collaborator.
Two write paths exist:

- :meth:`FilesStore.awrite_file`: used by the action engine. Creates
  missing parent folders and counts new files.
- :meth:`FilesStore.asave_file`: used for user edits. Records the content
  a path had before its first save since the last reset in the
  original-content ledger, which :meth:`FilesStore.get_file_modifications`
  diffs against.

Persistence is best effort: a failing collaborator is logged and the
in-memory state stays authoritative.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from actionkit.drivers.reactive.map_store import MapStore
from actionkit.kernel.config.models import FileStoreConfig
from actionkit.kernel.domain.files import FILE_MAP_ADAPTER, File, Folder
from actionkit.kernel.exceptions import FileStoreError
from actionkit.kernel.logging import get_scoped_logger
from actionkit.kernel.utils.diff import compute_file_modifications

if TYPE_CHECKING:
    from actionkit.kernel.domain.files import FileModification
    from actionkit.kernel.ports.key_value import SupportsKeyValue

logger = get_scoped_logger("FilesStore")


class FilesStore:
    """Observable in-memory file tree with an original-content ledger.

    Attributes
    ----------
    files : MapStore[File | Folder]
        Observable entries keyed by normalized absolute path.
    """

    def __init__(
        self,
        storage: SupportsKeyValue | None = None,
        config: FileStoreConfig | None = None,
    ) -> None:
        """Initialise the store.

        Args
        ----
            storage: Optional persistence collaborator. When ``None``
                (default), all data lives only in memory.
            config: Workspace root and storage key settings.
        """
        self._storage = storage
        self._config = config or FileStoreConfig()
        self._size = 0
        self._modified_files: dict[str, str] = {}
        self.files: MapStore[File | Folder] = MapStore()

    @property
    def files_count(self) -> int:
        """Number of distinct file paths ever written since the last clear."""
        return self._size

    @property
    def work_dir(self) -> str:
        return self._config.work_dir

    async def asetup(self) -> None:
        """Load a previously persisted file mapping, if any."""
        if self._storage is None:
            return

        try:
            stored = await self._storage.aget(self._config.storage_key)
            if not stored:
                return
            parsed = FILE_MAP_ADAPTER.validate_json(stored)
            for path, dirent in parsed.items():
                if isinstance(dirent, File) and not isinstance(self.files.get_key(path), File):
                    self._size += 1
                self.files.set_key(path, dirent)
            logger.info("Loaded {count} entries from storage", count=len(parsed))
        except Exception as e:
            logger.error("Failed to load files from storage: {error!r}", error=e)

    def normalize_path(self, file_path: str) -> str:
        """Resolve ``file_path`` to a normalized absolute workspace path.

        Absolute paths are kept, relative ones are placed under ``work_dir``.

        Raises
        ------
        FileStoreError
            If the path is empty or resolves to the root itself
        """
        raw = (file_path or "").strip()
        if not raw:
            raise FileStoreError(file_path, "path cannot be empty")
        if not raw.startswith("/"):
            raw = f"{self._config.work_dir}/{raw}"

        normalized = posixpath.normpath(raw)
        # POSIX keeps a leading "//" intact
        normalized = "/" + normalized.lstrip("/")
        if normalized == "/":
            raise FileStoreError(file_path, "path resolves to the root folder")
        return normalized

    def get_file(self, file_path: str) -> File | None:
        dirent = self.files.get_key(self.normalize_path(file_path))
        if not isinstance(dirent, File):
            return None
        return dirent

    def read_file(self, file_path: str) -> str | None:
        """Return the content at ``file_path`` or ``None`` if it is not a file."""
        file = self.get_file(file_path)
        return file.content if file is not None else None

    def get_original_content(self, file_path: str) -> str | None:
        """Return the ledgered original content of ``file_path``, if recorded."""
        return self._modified_files.get(self.normalize_path(file_path))

    def get_file_modifications(self) -> dict[str, FileModification]:
        return compute_file_modifications(self.files.get(), self._modified_files)

    def reset_file_modifications(self) -> None:
        """Forget every recorded original. File contents are untouched."""
        self._modified_files.clear()

    async def asave_file(self, file_path: str, content: str) -> None:
        """Apply a user edit, recording the pre-edit content on first save."""
        normalized_path = file_path

        try:
            normalized_path = self.normalize_path(file_path)
            old_content = self.read_file(normalized_path)

            if normalized_path not in self._modified_files and old_content is not None:
                self._modified_files[normalized_path] = old_content

            self._put_file(normalized_path, content)
        except Exception as e:
            logger.error("Failed to update file content {path}: {error!r}", path=normalized_path, error=e)
            raise

        await self._apersist()
        logger.info("File updated {path}", path=normalized_path)

    async def awrite_file(self, file_path: str, content: str) -> None:
        """Write ``content`` to ``file_path``, creating missing parent folders."""
        normalized_path = self.normalize_path(file_path)
        self._put_file(normalized_path, content)
        await self._apersist()
        logger.debug("File written: {path}", path=normalized_path)

    async def aclear_files(self) -> None:
        """Return the store to its initial empty state, persisted copy included."""
        self.files.set({})
        self._size = 0
        self._modified_files.clear()

        if self._storage is None:
            return
        try:
            await self._storage.adelete(self._config.storage_key)
        except Exception as e:
            logger.error("Failed to remove files from storage: {error!r}", error=e)

    def _put_file(self, normalized_path: str, content: str) -> None:
        self._ensure_folder_exists(posixpath.dirname(normalized_path))

        if self.get_file(normalized_path) is None:
            self._size += 1

        self.files.set_key(normalized_path, File(content=content, is_binary=False))

    def _ensure_folder_exists(self, folder_path: str) -> None:
        current_path = ""
        for part in folder_path.split("/"):
            if not part:
                continue
            current_path = f"{current_path}/{part}"
            if self.files.get_key(current_path) is None:
                self.files.set_key(current_path, Folder())

    async def _apersist(self) -> None:
        if self._storage is None:
            return
        try:
            payload = FILE_MAP_ADAPTER.dump_json(self.files.get()).decode("utf-8")
            await self._storage.aset(self._config.storage_key, payload)
        except Exception as e:
            logger.error("Failed to save files to storage: {error!r}", error=e)


__all__ = ["FilesStore"]
