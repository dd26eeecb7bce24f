"""actionkit - ordered, cancellable application of streamed actions to a virtual workspace.

A producer (for example a parser over a streaming model response) emits
file, shell and start actions. :class:`ActionRunner` registers them, applies
partial file content while it streams, and serializes every execution
through one FIFO queue onto a :class:`FilesStore`.
"""

from typing import TYPE_CHECKING, Any

try:
    from importlib.metadata import version

    __version__ = version("actionkit")
except Exception:
    __version__ = "0.0.0.dev0"

if TYPE_CHECKING:
    from actionkit.drivers.files.files_store import FilesStore
    from actionkit.kernel.domain.actions import (
        ActionCallbackData,
        ActionStatus,
        ActionType,
        FileAction,
        ShellAction,
        StartAction,
    )
    from actionkit.kernel.orchestration.action_runner import ActionRunner

_LAZY_IMPORTS = {
    "ActionCallbackData": "actionkit.kernel.domain.actions",
    "ActionRunner": "actionkit.kernel.orchestration.action_runner",
    "ActionStatus": "actionkit.kernel.domain.actions",
    "ActionType": "actionkit.kernel.domain.actions",
    "FileAction": "actionkit.kernel.domain.actions",
    "FilesStore": "actionkit.drivers.files.files_store",
    "ShellAction": "actionkit.kernel.domain.actions",
    "StartAction": "actionkit.kernel.domain.actions",
}


def __getattr__(name: str) -> Any:
    """Lazy import for the public API.

    Raises
    ------
    AttributeError
        If the name is not part of the public API
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module 'actionkit' has no attribute '{name}'")
    import importlib

    return getattr(importlib.import_module(module_name), name)


__all__ = [
    "ActionCallbackData",
    "ActionRunner",
    "ActionStatus",
    "ActionType",
    "FileAction",
    "FilesStore",
    "ShellAction",
    "StartAction",
    "__version__",
]
