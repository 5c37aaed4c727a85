"""Timer scheduling on the asyncio event loop.

Everything time-based in the view (settle/freeze, camera fit, highlight
expiry, sparkle repaint) goes through a Scheduler, so all work stays on the
loop thread and tests can drive a virtual clock instead.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol

Callback = Callable[[], None]


class Cancellable(Protocol):
    """Handle returned for every scheduled callback."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Single-threaded timer source."""

    def now(self) -> float:
        """Current time in seconds."""
        ...

    def call_later(self, delay: float, callback: Callback) -> Cancellable:
        """Run callback once after delay seconds."""
        ...

    def call_every(self, interval: float, callback: Callback) -> Cancellable:
        """Run callback every interval seconds until cancelled."""
        ...


class PeriodicHandle:
    """Repeating timer built on loop.call_later."""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callback) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._handle: asyncio.TimerHandle | None = loop.call_later(interval, self._run)

    def _run(self) -> None:
        if self._cancelled:
            return
        # Re-arm first so the callback may cancel the handle
        self._handle = self._loop.call_later(self._interval, self._run)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Uses the running loop at call time unless a loop is given.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback)

    def call_every(self, interval: float, callback: Callback) -> PeriodicHandle:
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        return PeriodicHandle(self.loop, interval, callback)
