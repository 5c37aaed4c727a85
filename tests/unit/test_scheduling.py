"""Unit tests for asyncio timer scheduling."""

import asyncio

import pytest

from constellation.scheduling import AsyncioScheduler


class TestAsyncioScheduler:
    """Tests for the event-loop scheduler."""

    @pytest.mark.asyncio
    async def test_now_is_loop_time(self) -> None:
        scheduler = AsyncioScheduler()
        assert scheduler.now() == pytest.approx(asyncio.get_running_loop().time(), abs=0.05)

    @pytest.mark.asyncio
    async def test_call_later_runs_once(self) -> None:
        scheduler = AsyncioScheduler()
        calls = []
        scheduler.call_later(0.01, lambda: calls.append("x"))
        await asyncio.sleep(0.05)
        assert calls == ["x"]

    @pytest.mark.asyncio
    async def test_negative_delay_clamped(self) -> None:
        scheduler = AsyncioScheduler()
        calls = []
        scheduler.call_later(-1, lambda: calls.append("x"))
        await asyncio.sleep(0.01)
        assert calls == ["x"]

    @pytest.mark.asyncio
    async def test_cancel_prevents_call(self) -> None:
        scheduler = AsyncioScheduler()
        calls = []
        handle = scheduler.call_later(0.01, lambda: calls.append("x"))
        handle.cancel()
        await asyncio.sleep(0.03)
        assert calls == []

    @pytest.mark.asyncio
    async def test_call_every_repeats_until_cancelled(self) -> None:
        scheduler = AsyncioScheduler()
        calls = []
        handle = scheduler.call_every(0.01, lambda: calls.append(1))
        await asyncio.sleep(0.08)
        handle.cancel()
        seen = len(calls)
        await asyncio.sleep(0.03)

        assert seen >= 2
        assert len(calls) == seen
        assert handle.cancelled

    @pytest.mark.asyncio
    async def test_periodic_callback_may_cancel_itself(self) -> None:
        """Test a callback cancelling its own handle stops the repeat."""
        scheduler = AsyncioScheduler()
        calls = []

        def tick() -> None:
            calls.append(1)
            handle.cancel()

        handle = scheduler.call_every(0.01, tick)
        await asyncio.sleep(0.05)
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_non_positive_interval_rejected(self) -> None:
        scheduler = AsyncioScheduler()
        with pytest.raises(ValueError):
            scheduler.call_every(0, lambda: None)
