"""Domain models for actions and virtual file entries."""

from actionkit.kernel.domain.actions import (
    Action,
    ActionCallbackData,
    ActionState,
    ActionStatus,
    ActionType,
    FileAction,
    ShellAction,
    StartAction,
)
from actionkit.kernel.domain.files import File, FileMap, FileModification, Folder

__all__ = [
    "Action",
    "ActionCallbackData",
    "ActionState",
    "ActionStatus",
    "ActionType",
    "File",
    "FileAction",
    "FileMap",
    "FileModification",
    "Folder",
    "ShellAction",
    "StartAction",
]
