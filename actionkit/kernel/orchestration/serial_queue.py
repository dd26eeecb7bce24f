"""Global serialization queue for side-effecting work.

Every unit of work goes through one :class:`asyncio.Queue` drained by a
single worker task, so at most one unit runs at a time and units run in
arrival order. A unit that raises is logged by the worker and the next
unit proceeds; waiters of the failed unit are released normally.

Example
-------
.. code-block:: python

    queue = SerialExecutionQueue()
    await queue.asubmit(write_first)    # returns once write_first has run
    queue.call_soon(mark_running)       # runs after everything queued so far
    await queue.aclose()
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from actionkit.kernel.logging import get_logger

logger = get_logger(__name__)

WorkFn = Callable[[], Awaitable[Any] | Any]


@dataclass(slots=True)
class _WorkItem:
    fn: WorkFn
    done: asyncio.Future[None] | None = None


class SerialExecutionQueue:
    """FIFO queue with a dedicated worker that runs one unit at a time.

    The worker is started lazily on the running event loop. Work enqueued
    while no loop is running waits in the queue until the next enqueue or
    :meth:`ajoin` made from inside a running loop starts the worker.
    """

    def __init__(self, name: str = "actions") -> None:
        self._name = name
        self._queue: asyncio.Queue[_WorkItem] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def pending(self) -> int:
        """Number of units waiting to run (excluding the one in flight)."""
        return self._queue.qsize()

    @property
    def closed(self) -> bool:
        return self._closed

    def call_soon(self, fn: WorkFn) -> None:
        """Enqueue ``fn`` behind everything queued so far without waiting for it."""
        self._enqueue(_WorkItem(fn=fn))

    async def asubmit(self, fn: WorkFn) -> None:
        """Enqueue ``fn`` and wait until it (and everything ahead of it) has run.

        Failures inside ``fn`` are logged by the worker, never raised here.
        """
        loop = asyncio.get_running_loop()
        done: asyncio.Future[None] = loop.create_future()
        self._enqueue(_WorkItem(fn=fn, done=done))
        await done

    async def ajoin(self) -> None:
        """Wait until every unit enqueued so far has run."""
        if self._queue.empty() and self._worker is None:
            return
        self._ensure_worker()
        await self._queue.join()

    async def aclose(self) -> None:
        """Stop the worker and cancel every waiter that has not run yet."""
        self._closed = True
        if self._worker is not None:
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
            self._worker = None

        while not self._queue.empty():
            item = self._queue.get_nowait()
            if item.done is not None and not item.done.done():
                item.done.cancel()
            self._queue.task_done()

    def _enqueue(self, item: _WorkItem) -> None:
        if self._closed:
            raise RuntimeError(f"Serial queue '{self._name}' is closed")
        self._ensure_worker()
        self._queue.put_nowait(item)

    def _ensure_worker(self) -> None:
        if self._worker is not None and not self._worker.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, deferring worker for queue {name}", name=self._name)
            return
        self._worker = loop.create_task(self._process(), name=f"serial-queue-{self._name}")

    async def _process(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                result = item.fn()
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                if item.done is not None and not item.done.done():
                    item.done.cancel()
                self._queue.task_done()
                raise
            except Exception as e:
                logger.error("Action failed: {error!r}", error=e)
            if item.done is not None and not item.done.done():
                item.done.set_result(None)
            self._queue.task_done()


__all__ = ["SerialExecutionQueue"]
