"""Tests for the global serialization queue."""

from __future__ import annotations

import asyncio

import pytest

from actionkit.kernel.orchestration.serial_queue import SerialExecutionQueue


class TestOrdering:
    @pytest.mark.asyncio
    async def test_units_run_in_arrival_order_one_at_a_time(self) -> None:
        queue = SerialExecutionQueue()
        events: list[str] = []
        in_flight = 0
        max_in_flight = 0

        def unit(name: str, delay: float):
            async def _run() -> None:
                nonlocal in_flight, max_in_flight
                in_flight += 1
                max_in_flight = max(max_in_flight, in_flight)
                events.append(f"start:{name}")
                await asyncio.sleep(delay)
                events.append(f"end:{name}")
                in_flight -= 1

            return _run

        await asyncio.gather(
            queue.asubmit(unit("a", 0.05)),
            queue.asubmit(unit("b", 0.0)),
            queue.asubmit(unit("c", 0.01)),
        )
        await queue.aclose()

        assert events == ["start:a", "end:a", "start:b", "end:b", "start:c", "end:c"]
        assert max_in_flight == 1

    @pytest.mark.asyncio
    async def test_call_soon_runs_behind_queued_work(self) -> None:
        queue = SerialExecutionQueue()
        events: list[str] = []

        async def slow() -> None:
            await asyncio.sleep(0.02)
            events.append("slow")

        submitted = asyncio.ensure_future(queue.asubmit(slow))
        await asyncio.sleep(0)
        queue.call_soon(lambda: events.append("sync"))
        await submitted
        await queue.ajoin()
        await queue.aclose()

        assert events == ["slow", "sync"]

    @pytest.mark.asyncio
    async def test_sync_callables_are_supported(self) -> None:
        queue = SerialExecutionQueue()
        seen: list[int] = []
        await queue.asubmit(lambda: seen.append(1))
        await queue.aclose()
        assert seen == [1]


class TestFailureIsolation:
    @pytest.mark.asyncio
    async def test_failing_unit_does_not_block_the_next(self) -> None:
        queue = SerialExecutionQueue()
        seen: list[str] = []

        async def boom() -> None:
            raise RuntimeError("boom")

        await queue.asubmit(boom)
        await queue.asubmit(lambda: seen.append("after"))
        await queue.aclose()

        assert seen == ["after"]


class TestClose:
    @pytest.mark.asyncio
    async def test_enqueue_after_close_raises(self) -> None:
        queue = SerialExecutionQueue("test")
        await queue.aclose()

        assert queue.closed
        with pytest.raises(RuntimeError, match="closed"):
            queue.call_soon(lambda: None)

    @pytest.mark.asyncio
    async def test_close_cancels_waiters_still_queued(self) -> None:
        queue = SerialExecutionQueue()
        release = asyncio.Event()

        async def blocker() -> None:
            await release.wait()

        first = asyncio.ensure_future(queue.asubmit(blocker))
        second = asyncio.ensure_future(queue.asubmit(lambda: None))
        await asyncio.sleep(0.01)
        assert queue.pending == 1

        await queue.aclose()

        with pytest.raises(asyncio.CancelledError):
            await first
        with pytest.raises(asyncio.CancelledError):
            await second


class TestDeferredWorker:
    def test_work_enqueued_without_loop_runs_once_loop_starts(self) -> None:
        queue = SerialExecutionQueue()
        seen: list[str] = []

        queue.call_soon(lambda: seen.append("early"))
        assert queue.pending == 1

        async def drain() -> None:
            await queue.ajoin()
            await queue.aclose()

        asyncio.run(drain())

        assert seen == ["early"]
