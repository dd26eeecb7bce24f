"""Key-value persistence port.

The virtual file store persists its whole file mapping as one JSON string
under a single key. The backing store is opaque and best effort: callers
log failures and never surface them.

Drivers
-------
- ``InMemoryKeyValueStore``: process-local dict, the default for tests.
- ``JsonFileKeyValueStore``: one JSON file per key in a directory.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class SupportsKeyValue(Protocol):
    """String-keyed get/set/delete storage."""

    @abstractmethod
    async def aget(self, key: str) -> str | None:
        """Retrieve the value stored under ``key``; ``None`` when absent."""
        ...

    @abstractmethod
    async def aset(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` (upsert semantics)."""
        ...

    @abstractmethod
    async def adelete(self, key: str) -> bool:
        """Delete ``key``. Returns ``True`` if the key existed."""
        ...


__all__ = ["SupportsKeyValue"]
