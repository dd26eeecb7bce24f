"""In-process observable map.

Listeners are plain synchronous callables invoked after every change with
a snapshot of the mapping and the changed key (``None`` for a full replace).
A listener that raises is logged and the remaining listeners still run.

Example
-------
.. code-block:: python

    files: MapStore[File | Folder] = MapStore()
    unsubscribe = files.subscribe(lambda snapshot, key: print(key))
    files.set_key("/home/project/a.txt", File(content="hi"))
    unsubscribe()
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Generic, TypeVar

from actionkit.kernel.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

logger = get_logger(__name__)

V = TypeVar("V")


class MapStore(Generic[V]):
    """Observable ``str`` keyed mapping with snapshot reads."""

    def __init__(self, initial: Mapping[str, V] | None = None) -> None:
        self._value: dict[str, V] = dict(initial or {})
        self._listeners: dict[str, Callable[[dict[str, V], str | None], None]] = {}

    def get(self) -> dict[str, V]:
        """Return a snapshot copy of the whole mapping."""
        return dict(self._value)

    def get_key(self, key: str) -> V | None:
        return self._value.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._value

    def __len__(self) -> int:
        return len(self._value)

    def set(self, value: Mapping[str, V]) -> None:
        """Replace the whole mapping."""
        self._value = dict(value)
        self._notify(None)

    def set_key(self, key: str, value: V) -> None:
        self._value[key] = value
        self._notify(key)

    def delete_key(self, key: str) -> bool:
        """Remove ``key``. Returns ``True`` if it existed."""
        if key not in self._value:
            return False
        del self._value[key]
        self._notify(key)
        return True

    def listen(self, listener: Callable[[dict[str, V], str | None], None]) -> Callable[[], None]:
        """Register ``listener`` for future changes only."""
        listener_id = str(uuid.uuid4())
        self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    def subscribe(self, listener: Callable[[dict[str, V], str | None], None]) -> Callable[[], None]:
        """Register ``listener``, call it once with the current value, return an unsubscriber."""
        unsubscribe = self.listen(listener)
        self._call(listener, None)
        return unsubscribe

    def _notify(self, changed_key: str | None) -> None:
        for listener in list(self._listeners.values()):
            self._call(listener, changed_key)

    def _call(
        self, listener: Callable[[dict[str, V], str | None], None], changed_key: str | None
    ) -> None:
        try:
            listener(self.get(), changed_key)
        except Exception as e:
            name = getattr(listener, "__name__", "anonymous_listener")
            logger.warning(
                "Listener {name} failed for key {key}: {error!r}",
                name=name,
                key=changed_key,
                error=e,
            )


__all__ = ["MapStore"]
