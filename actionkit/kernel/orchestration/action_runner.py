"""Action execution engine.

:class:`ActionRunner` owns one :class:`ActionState` per action id and pushes
every side-effecting execution through a single
:class:`SerialExecutionQueue` shared by all actions. Producers register an
action with :meth:`ActionRunner.add_action`, may stream partial file content
with ``arun_action(data, is_streaming=True)``, and finalize it with one
non-streaming :meth:`ActionRunner.arun_action` call.

Example
-------
.. code-block:: python

    runner = ActionRunner(FilesStore())
    data = ActionCallbackData(
        action_id="a1",
        action=FileAction(file_path="/home/project/a.txt", content="hello"),
    )
    runner.add_action(data)
    await runner.arun_action(data)
    assert runner.actions.get_key("a1").status == ActionStatus.COMPLETE
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from actionkit.drivers.reactive.map_store import MapStore
from actionkit.kernel.config.models import RunnerConfig
from actionkit.kernel.domain.actions import (
    DEFAULT_FAILURE_MESSAGE,
    STREAMABLE_TYPES,
    ActionState,
    ActionStatus,
    ActionType,
)
from actionkit.kernel.exceptions import ActionExecutionError, ProtocolViolationError
from actionkit.kernel.logging import get_scoped_logger
from actionkit.kernel.orchestration.cancellation import AbortController
from actionkit.kernel.orchestration.serial_queue import SerialExecutionQueue

if TYPE_CHECKING:
    from actionkit.drivers.files.files_store import FilesStore
    from actionkit.kernel.domain.actions import ActionCallbackData

logger = get_scoped_logger("ActionRunner")


class ActionRunner:
    """Registers, streams and serially executes producer actions.

    Attributes
    ----------
    runner_id : str
        Millisecond timestamp identifying this runner instance.
    actions : MapStore[ActionState]
        Observable action states keyed by action id.
    """

    def __init__(
        self,
        files_store: FilesStore,
        config: RunnerConfig | None = None,
        queue: SerialExecutionQueue | None = None,
    ) -> None:
        self._files_store = files_store
        self._config = config or RunnerConfig()
        self._queue = queue or SerialExecutionQueue("actions")
        self.runner_id = f"{int(time.time() * 1000)}"
        self.actions: MapStore[ActionState] = MapStore()

    @property
    def queue(self) -> SerialExecutionQueue:
        return self._queue

    def add_action(self, data: ActionCallbackData) -> None:
        """Register an action as ``pending``. Re-registering a known id is a no-op.

        Safe to call without a running event loop; the queued ``running`` mark
        then waits until the queue is next used from inside a loop.
        """
        action_id = data.action_id

        if self.actions.get_key(action_id) is not None:
            return

        abort_controller = AbortController()

        def abort() -> None:
            abort_controller.abort()
            current = self.actions.get_key(action_id)
            if current is not None and not current.status.is_terminal:
                self._update_action(action_id, status=ActionStatus.ABORTED)

        self.actions.set_key(
            action_id,
            ActionState.from_callback(data, abort=abort, abort_signal=abort_controller.signal),
        )

        self._queue.call_soon(lambda: self._mark_about_to_run(action_id))

    async def arun_action(self, data: ActionCallbackData, is_streaming: bool = False) -> None:
        """Merge ``data`` into the action and execute it on the global queue.

        Returns once this execution (and everything queued ahead of it) has
        finished.

        Raises
        ------
        ProtocolViolationError
            If ``data.action_id`` was never registered with :meth:`add_action`,
            or ``data.action`` has a different type than the registered action.
        """
        action_id = data.action_id
        action = self.actions.get_key(action_id)

        if action is None:
            raise ProtocolViolationError(f"Action {action_id} not found")

        if action.executed:
            return

        if action.abort_signal.aborted:
            return

        if is_streaming and action.type not in STREAMABLE_TYPES:
            return

        self.actions.set_key(
            action_id, action.merge_action(data.action).replace(executed=not is_streaming)
        )

        await self._queue.asubmit(lambda: self._execute_action(action_id, is_streaming))

    async def _execute_action(self, action_id: str, is_streaming: bool = False) -> None:
        action = self.actions.get_key(action_id)
        if action is None:
            raise ProtocolViolationError(f"Action {action_id} not found")

        if action.abort_signal.aborted:
            logger.debug("Skipping aborted action {action_id}", action_id=action_id)
            return

        self._update_action(action_id, status=ActionStatus.RUNNING)

        try:
            match action.type:
                case ActionType.SHELL:
                    logger.info("Shell command (not executed): {command}", command=action.content)
                case ActionType.FILE:
                    await self._run_file_action(action)
                case ActionType.START:
                    logger.info("Start command (not executed): {command}", command=action.content)

            if action.abort_signal.aborted:
                status = ActionStatus.ABORTED
            elif is_streaming:
                status = ActionStatus.RUNNING
            else:
                status = ActionStatus.COMPLETE
            self._update_action(action_id, status=status)
        except Exception as e:
            self._update_action(action_id, status=ActionStatus.FAILED, error=DEFAULT_FAILURE_MESSAGE)
            logger.error("[{type}]: Action failed: {error!r}", type=action.type, error=e)
            raise

    async def _run_file_action(self, action: ActionState) -> None:
        if action.type != ActionType.FILE or not action.file_path:
            raise ProtocolViolationError(f"Expected file action, got {action.type}")

        try:
            await self._files_store.awrite_file(action.file_path, action.content)
            logger.debug("File written {path}", path=action.file_path)
        except Exception as e:
            logger.error("Failed to write file {path}: {error!r}", path=action.file_path, error=e)
            if self._config.surface_write_errors:
                raise ActionExecutionError(action.action_id, action.type, str(e)) from e

    def _mark_about_to_run(self, action_id: str) -> None:
        action = self.actions.get_key(action_id)
        if action is None or action.status != ActionStatus.PENDING:
            return
        if action.abort_signal.aborted:
            return
        self._update_action(action_id, status=ActionStatus.RUNNING)

    def _update_action(self, action_id: str, **changes: Any) -> None:
        action = self.actions.get_key(action_id)
        if action is None:
            return
        self.actions.set_key(action_id, action.replace(**changes))


__all__ = ["ActionRunner"]
