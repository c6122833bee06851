"""Fixed-rate tick scheduling with an injectable clock.

The dashboard reruns on a timer; on every rerun it asks the scheduler how
many simulated hours are due since the last one it accounted for. Tests
drive a :class:`ManualClock` instead of waiting on wall time.
"""
from __future__ import annotations

import logging
import time
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Clock(Protocol):
    def now(self) -> float: ...


class SystemClock:
    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("Clock cannot move backwards")
        self._now += seconds


class TickScheduler:
    """Counts due ticks at a fixed interval while running.

    Attributes:
        interval_seconds: Wall time represented by one simulated hour.
        max_catch_up: Upper bound on ticks returned by one ``due_ticks`` call,
            so a stalled browser tab does not replay hours of backlog.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        interval_seconds: float = 1.0,
        max_catch_up: int = 10,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if max_catch_up < 1:
            raise ValueError("max_catch_up must be at least 1")
        self.clock = clock or SystemClock()
        self.interval_seconds = float(interval_seconds)
        self.max_catch_up = int(max_catch_up)
        self._running = False
        self._anchor: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._anchor = self.clock.now()
        logger.info("scheduler started (interval %.2fs)", self.interval_seconds)

    def pause(self) -> None:
        if not self._running:
            return
        self._running = False
        self._anchor = None
        logger.info("scheduler paused")

    def toggle(self) -> bool:
        if self._running:
            self.pause()
        else:
            self.start()
        return self._running

    def due_ticks(self) -> int:
        if not self._running or self._anchor is None:
            return 0
        elapsed = self.clock.now() - self._anchor
        due = int(elapsed // self.interval_seconds)
        if due <= 0:
            return 0
        if due > self.max_catch_up:
            logger.debug("dropping %d overdue ticks", due - self.max_catch_up)
            self._anchor = self.clock.now()
            return self.max_catch_up
        self._anchor += due * self.interval_seconds
        return due


__all__ = ["Clock", "SystemClock", "ManualClock", "TickScheduler"]
