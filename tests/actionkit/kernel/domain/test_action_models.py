"""Tests for action domain models and ActionState transitions."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

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
from actionkit.kernel.exceptions import ProtocolViolationError
from actionkit.kernel.orchestration.cancellation import AbortController


def _state(data: ActionCallbackData) -> ActionState:
    controller = AbortController()
    return ActionState.from_callback(data, abort=controller.abort, abort_signal=controller.signal)


class TestActionModels:
    def test_discriminated_union_picks_file_action(self) -> None:
        adapter = TypeAdapter(Action)
        action = adapter.validate_python(
            {"type": "file", "file_path": "/home/project/a.txt", "content": "x"}
        )
        assert isinstance(action, FileAction)
        assert action.file_path == "/home/project/a.txt"

    def test_discriminated_union_picks_shell_and_start(self) -> None:
        adapter = TypeAdapter(Action)
        assert isinstance(adapter.validate_python({"type": "shell", "content": "ls"}), ShellAction)
        assert isinstance(adapter.validate_python({"type": "start", "content": "npm run dev"}), StartAction)

    def test_file_action_requires_path(self) -> None:
        with pytest.raises(PydanticValidationError):
            FileAction(content="x")  # type: ignore[call-arg]

    def test_shell_action_rejects_file_path(self) -> None:
        with pytest.raises(PydanticValidationError):
            ShellAction(content="ls", file_path="/a")  # type: ignore[call-arg]

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            TypeAdapter(Action).validate_python({"type": "deploy", "content": ""})

    def test_callback_data_requires_action_id(self) -> None:
        with pytest.raises(PydanticValidationError):
            ActionCallbackData(action_id="", action=ShellAction(content="ls"))

    def test_status_terminal_flags(self) -> None:
        assert ActionStatus.COMPLETE.is_terminal
        assert ActionStatus.ABORTED.is_terminal
        assert ActionStatus.FAILED.is_terminal
        assert not ActionStatus.PENDING.is_terminal
        assert not ActionStatus.RUNNING.is_terminal


class TestActionState:
    def test_from_callback_starts_pending(self) -> None:
        data = ActionCallbackData(
            action_id="f1", action=FileAction(file_path="/home/project/a.txt", content="hi")
        )
        state = _state(data)

        assert state.status == ActionStatus.PENDING
        assert state.type == ActionType.FILE
        assert state.file_path == "/home/project/a.txt"
        assert state.content == "hi"
        assert state.executed is False
        assert state.error is None

    def test_shell_state_has_no_file_path(self) -> None:
        state = _state(ActionCallbackData(action_id="s1", action=ShellAction(content="ls")))
        assert state.file_path is None
        assert state.type == ActionType.SHELL

    def test_merge_action_refreshes_content(self) -> None:
        state = _state(
            ActionCallbackData(action_id="f1", action=FileAction(file_path="/a.txt", content="he"))
        )
        merged = state.merge_action(FileAction(file_path="/b.txt", content="hello"))

        assert merged.content == "hello"
        assert merged.file_path == "/b.txt"
        assert state.content == "he"

    def test_merge_action_rejects_other_type(self) -> None:
        state = _state(ActionCallbackData(action_id="s1", action=ShellAction(content="ls")))

        with pytest.raises(ProtocolViolationError):
            state.merge_action(FileAction(file_path="/a.txt", content="x"))

    def test_error_cleared_when_leaving_failed(self) -> None:
        state = _state(ActionCallbackData(action_id="s1", action=ShellAction(content="ls")))
        failed = state.replace(status=ActionStatus.FAILED, error="Action failed")
        assert failed.error == "Action failed"

        running = failed.replace(status=ActionStatus.RUNNING)
        assert running.error is None

    def test_state_is_immutable(self) -> None:
        state = _state(ActionCallbackData(action_id="s1", action=ShellAction(content="ls")))
        with pytest.raises(AttributeError):
            state.status = ActionStatus.RUNNING  # type: ignore[misc]

    def test_to_dict_reports_abort_flag(self) -> None:
        controller = AbortController()
        data = ActionCallbackData(action_id="s1", action=ShellAction(content="ls"))
        state = ActionState.from_callback(
            data, abort=controller.abort, abort_signal=controller.signal
        )
        controller.abort()

        payload = state.to_dict()
        assert payload["aborted"] is True
        assert payload["status"] == "pending"
        assert "abort" not in payload
