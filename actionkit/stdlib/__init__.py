"""Standard library stores built on the kernel primitives."""

from actionkit.stdlib.settings import Shortcut, settings_store, shortcuts_store

__all__ = ["Shortcut", "settings_store", "shortcuts_store"]
