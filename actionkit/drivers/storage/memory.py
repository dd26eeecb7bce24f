"""In-memory key-value store for tests and ephemeral sessions."""

from __future__ import annotations

import asyncio
from typing import Any

from actionkit.kernel.exceptions import StorageError


class InMemoryKeyValueStore:
    """Dict-backed :class:`~actionkit.kernel.ports.key_value.SupportsKeyValue`.

    Features:
    - Access history tracking
    - Delay simulation
    - Failure injection via ``fail_on`` (operation names that raise)
    """

    def __init__(self, delay_seconds: float = 0.0, fail_on: set[str] | None = None) -> None:
        self.delay_seconds = delay_seconds
        self.fail_on: set[str] = set(fail_on or ())
        self.storage: dict[str, str] = {}
        self.access_history: list[dict[str, Any]] = []

    async def _simulate(self, operation: str, key: str) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        self.access_history.append({"operation": operation, "key": key})
        if operation in self.fail_on:
            raise StorageError(key, f"simulated {operation} failure")

    async def aget(self, key: str) -> str | None:
        await self._simulate("get", key)
        return self.storage.get(key)

    async def aset(self, key: str, value: str) -> None:
        await self._simulate("set", key)
        self.storage[key] = value

    async def adelete(self, key: str) -> bool:
        await self._simulate("delete", key)
        return self.storage.pop(key, None) is not None

    def reset(self) -> None:
        """Drop all data and history."""
        self.storage.clear()
        self.access_history.clear()


__all__ = ["InMemoryKeyValueStore"]
