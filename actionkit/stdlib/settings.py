"""Editor settings stores.

``shortcuts_store`` holds keyboard shortcut bindings by name;
``settings_store`` mirrors them under its ``shortcuts`` key so consumers that
watch the whole settings object see shortcut changes too.

Usage::

    from actionkit.stdlib.settings import Shortcut, shortcuts_store

    shortcuts_store.set_key("save", Shortcut(key="s", ctrl_or_meta_key=True, action=save))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from actionkit.drivers.reactive.map_store import MapStore


@dataclass(frozen=True, slots=True)
class Shortcut:
    """A keyboard shortcut binding."""

    key: str
    action: Callable[[], None] = field(compare=False, repr=False)
    ctrl_key: bool = False
    shift_key: bool = False
    alt_key: bool = False
    meta_key: bool = False
    ctrl_or_meta_key: bool = False

    def matches(
        self,
        key: str,
        *,
        ctrl: bool = False,
        shift: bool = False,
        alt: bool = False,
        meta: bool = False,
    ) -> bool:
        """Check a key press against this binding.

        ``ctrl_or_meta_key`` accepts either modifier and ignores the
        individual ``ctrl_key`` / ``meta_key`` flags.
        """
        if key.lower() != self.key.lower():
            return False
        if self.ctrl_or_meta_key:
            if not (ctrl or meta):
                return False
        elif ctrl != self.ctrl_key or meta != self.meta_key:
            return False
        return shift == self.shift_key and alt == self.alt_key


Shortcuts = dict[str, Shortcut]


def create_settings_stores() -> tuple[MapStore[Shortcut], MapStore[Shortcuts]]:
    """Create a linked ``(shortcuts, settings)`` store pair."""
    shortcuts: MapStore[Shortcut] = MapStore()
    settings: MapStore[Shortcuts] = MapStore({"shortcuts": shortcuts.get()})

    def _sync(snapshot: dict[str, Shortcut], _changed_key: str | None) -> None:
        settings.set_key("shortcuts", snapshot)

    shortcuts.listen(_sync)
    return shortcuts, settings


shortcuts_store, settings_store = create_settings_stores()


__all__ = [
    "Shortcut",
    "Shortcuts",
    "create_settings_stores",
    "settings_store",
    "shortcuts_store",
]
