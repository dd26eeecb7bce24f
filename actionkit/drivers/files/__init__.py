"""Virtual file store driver."""

from actionkit.drivers.files.files_store import FilesStore

__all__ = ["FilesStore"]
