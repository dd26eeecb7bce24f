"""Domain models for producer actions and engine-owned action state.

A producer (typically a parser over a streaming model response) emits
:class:`ActionCallbackData` envelopes. The engine keeps one
:class:`ActionState` per ``action_id`` and replaces it with a new snapshot
on every change, so subscribers never observe a half-applied update.

State machine::

    pending --dequeue--> running --ok, !streaming, !aborted--> complete
    running --streaming--> running
    running --signal raised--> aborted
    running --dispatch raises--> failed
    any non-terminal --abort()--> aborted
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from actionkit.kernel.exceptions import ProtocolViolationError

if TYPE_CHECKING:
    from actionkit.kernel.orchestration.cancellation import CancellationToken


class ActionType(StrEnum):
    """Kind of a declarative action."""

    FILE = "file"
    SHELL = "shell"
    START = "start"


class ActionStatus(StrEnum):
    """Lifecycle status of an action."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    ABORTED = "aborted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({ActionStatus.COMPLETE, ActionStatus.ABORTED, ActionStatus.FAILED})

STREAMABLE_TYPES = frozenset({ActionType.FILE})

DEFAULT_FAILURE_MESSAGE = "Action failed"


class _BaseAction(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    content: str = ""


class FileAction(_BaseAction):
    """Write ``content`` to ``file_path`` in the virtual workspace."""

    type: Literal["file"] = "file"
    file_path: str = Field(min_length=1)


class ShellAction(_BaseAction):
    """Shell command text. Logged, never executed."""

    type: Literal["shell"] = "shell"


class StartAction(_BaseAction):
    """Long-running start command (dev server etc.). Logged, never executed."""

    type: Literal["start"] = "start"


Action = Annotated[FileAction | ShellAction | StartAction, Field(discriminator="type")]


class ActionCallbackData(BaseModel):
    """Envelope handed from the producer to the engine.

    Attributes
    ----------
    action_id : str
        Unique identifier of the logical action within a run.
    action : Action
        The action payload; its ``content`` may be partial while streaming.
    artifact_id : str | None
        Identifier of the artifact the action belongs to, if any.
    message_id : str | None
        Identifier of the producer message the action was parsed from.
    """

    model_config = ConfigDict(frozen=True)

    action_id: str = Field(min_length=1)
    action: Action
    artifact_id: str | None = None
    message_id: str | None = None


@dataclass(frozen=True, slots=True)
class ActionState:
    """Engine-owned snapshot of one action.

    ``error`` is only populated while ``status`` is ``failed``.
    """

    action_id: str
    type: ActionType
    content: str
    abort: Callable[[], None] = field(repr=False, compare=False)
    abort_signal: CancellationToken = field(repr=False, compare=False)
    status: ActionStatus = ActionStatus.PENDING
    executed: bool = False
    file_path: str | None = None
    error: str | None = None

    @classmethod
    def from_callback(
        cls,
        data: ActionCallbackData,
        *,
        abort: Callable[[], None],
        abort_signal: CancellationToken,
    ) -> ActionState:
        """Create the initial ``pending`` state for a newly registered action."""
        return cls(
            action_id=data.action_id,
            type=ActionType(data.action.type),
            content=data.action.content,
            file_path=getattr(data.action, "file_path", None),
            abort=abort,
            abort_signal=abort_signal,
        )

    def merge_action(self, action: FileAction | ShellAction | StartAction) -> ActionState:
        """Return a copy refreshed with the fields of an incoming record.

        Raises
        ------
        ProtocolViolationError
            If the record's type differs from the registered action type
        """
        if ActionType(action.type) != self.type:
            raise ProtocolViolationError(
                f"Action {self.action_id} is {self.type}, got a {action.type} record"
            )
        changes: dict[str, Any] = {"content": action.content}
        if isinstance(action, FileAction):
            changes["file_path"] = action.file_path
        return self.replace(**changes)

    def replace(self, **changes: Any) -> ActionState:
        """Return a copy with ``changes`` applied.

        Moving to any status other than ``failed`` drops a stale error.
        """
        status = changes.get("status")
        if status is not None and status != ActionStatus.FAILED and "error" not in changes:
            changes["error"] = None
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serializable view without the abort callable and token."""
        return {
            "action_id": self.action_id,
            "type": str(self.type),
            "content": self.content,
            "file_path": self.file_path,
            "status": str(self.status),
            "executed": self.executed,
            "aborted": self.abort_signal.aborted,
            "error": self.error,
        }


__all__ = [
    "DEFAULT_FAILURE_MESSAGE",
    "STREAMABLE_TYPES",
    "TERMINAL_STATUSES",
    "Action",
    "ActionCallbackData",
    "ActionState",
    "ActionStatus",
    "ActionType",
    "FileAction",
    "ShellAction",
    "StartAction",
]
