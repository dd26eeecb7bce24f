"""Action orchestration: cancellation, serialization queue and the runner."""

from actionkit.kernel.orchestration.action_runner import ActionRunner
from actionkit.kernel.orchestration.cancellation import AbortController, CancellationToken
from actionkit.kernel.orchestration.serial_queue import SerialExecutionQueue

__all__ = ["AbortController", "ActionRunner", "CancellationToken", "SerialExecutionQueue"]
