"""Periodic repaint trigger for the sparkle animation."""

import logging

from constellation.config import settings
from constellation.scheduling import Callback, Cancellable, Scheduler

logger = logging.getLogger(__name__)


class PulseTicker:
    """Calls on_tick every interval while running.

    Only asks for a redraw; never touches topology or positions.
    """

    def __init__(self, scheduler: Scheduler, on_tick: Callback, interval: float | None = None) -> None:
        self.scheduler = scheduler
        self.on_tick = on_tick
        self.interval = interval or settings.pulse_interval
        self._handle: Cancellable | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self._handle is not None:
            return
        self._handle = self.scheduler.call_every(self.interval, self.on_tick)
        logger.debug(f"Pulse started every {self.interval}s")

    def stop(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
