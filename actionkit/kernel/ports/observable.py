"""Observable map port: reactive key-value snapshots.

Both the engine's action states and the file store's entries are exposed
as an observable map. Observers are notification-only: they receive a
snapshot and cannot affect the writer.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Mapping
from typing import Protocol, TypeVar, runtime_checkable

V = TypeVar("V")

# Listener receives the new snapshot and the changed key (None for a full replace)
MapListener = Callable[[Mapping[str, object], str | None], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class ObservableMap(Protocol[V]):
    """Mapping with explicit change subscription."""

    @abstractmethod
    def get(self) -> dict[str, V]:
        """Return a snapshot copy of the whole mapping."""
        ...

    @abstractmethod
    def get_key(self, key: str) -> V | None:
        """Return the value under ``key`` or ``None``."""
        ...

    @abstractmethod
    def set_key(self, key: str, value: V) -> None:
        """Store ``value`` under ``key`` and notify observers."""
        ...

    @abstractmethod
    def subscribe(self, listener: MapListener) -> Unsubscribe:
        """Register ``listener``, call it once with the current value, return an unsubscriber."""
        ...


__all__ = ["MapListener", "ObservableMap", "Unsubscribe"]
