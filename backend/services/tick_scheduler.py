"""
Tick schedulers: the timer collaborator that drives the simulation.

Every scheduler exposes the same three calls:
 - start(interval_ms, on_tick)
 - stop()
 - reschedule(interval_ms)

ManualTickScheduler never fires on its own; tests and client-driven
sessions call advance() (or the session's tick()) themselves.
ScheduleTickScheduler uses the `schedule` library and a polling loop, the
same way the maintenance cron service runs its jobs.
"""

import logging
import time
from typing import Callable, Optional

import schedule

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]

POLL_SLEEP_SECONDS = 0.005


class TickScheduler:
    """Base class/interface for tick timers."""

    def __init__(self):
        self.interval_ms: Optional[int] = None
        self.on_tick: Optional[TickCallback] = None
        self.running = False

    def start(self, interval_ms: int, on_tick: TickCallback) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError

    def reschedule(self, interval_ms: int) -> None:
        raise NotImplementedError

    @staticmethod
    def _validated_interval(interval_ms: int) -> int:
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms} ms.")
        return int(interval_ms)


class ManualTickScheduler(TickScheduler):
    """
    Deterministic scheduler. Records the requested interval but only
    ticks when advance() is called.
    """

    def __init__(self):
        super().__init__()
        self.start_count = 0

    def start(self, interval_ms: int, on_tick: TickCallback) -> None:
        self.interval_ms = self._validated_interval(interval_ms)
        self.on_tick = on_tick
        self.running = True
        self.start_count += 1

    def stop(self) -> None:
        self.running = False

    def reschedule(self, interval_ms: int) -> None:
        self.interval_ms = self._validated_interval(interval_ms)

    def advance(self, ticks: int = 1) -> int:
        """Fire up to `ticks` callbacks, stopping early if the scheduler stops."""
        fired = 0
        while fired < ticks and self.running and self.on_tick is not None:
            self.on_tick()
            fired += 1
        return fired


class ScheduleTickScheduler(TickScheduler):
    """
    Real-time scheduler backed by a private schedule.Scheduler.

    run() blocks the calling thread and polls run_pending() until stop()
    is called, so ticks never overlap.
    """

    def __init__(self, poll_sleep_seconds: float = POLL_SLEEP_SECONDS):
        super().__init__()
        self.poll_sleep_seconds = poll_sleep_seconds
        self._scheduler = schedule.Scheduler()
        self._job: Optional[schedule.Job] = None

    def start(self, interval_ms: int, on_tick: TickCallback) -> None:
        self.interval_ms = self._validated_interval(interval_ms)
        self.on_tick = on_tick
        self._register()
        self.running = True
        logger.info("Tick scheduler started every %s ms.", self.interval_ms)

    def stop(self) -> None:
        self._scheduler.clear()
        self._job = None
        if self.running:
            logger.info("Tick scheduler stopped.")
        self.running = False

    def reschedule(self, interval_ms: int) -> None:
        self.interval_ms = self._validated_interval(interval_ms)
        if self.running:
            self._register()
            logger.info("Tick scheduler rescheduled to every %s ms.", self.interval_ms)

    @property
    def job(self) -> Optional[schedule.Job]:
        return self._job

    def _register(self) -> None:
        self._scheduler.clear()
        self._job = self._scheduler.every(self.interval_ms / 1000.0).seconds.do(self._fire)

    def _fire(self) -> None:
        if self.running and self.on_tick is not None:
            self.on_tick()

    def run_pending(self) -> None:
        self._scheduler.run_pending()

    def run(self, max_ticks: Optional[int] = None) -> None:
        """Poll until stopped, or until max_ticks callbacks have fired."""
        fired = 0
        callback = self.on_tick

        def counting_tick():
            nonlocal fired
            fired += 1
            result = callback()
            if max_ticks is not None and fired >= max_ticks:
                self.stop()
            return result

        if max_ticks is not None:
            self.on_tick = counting_tick
        try:
            while self.running:
                self._scheduler.run_pending()
                idle = self._scheduler.idle_seconds
                if idle is None:
                    break
                time.sleep(min(max(idle, 0), self.poll_sleep_seconds))
        finally:
            self.on_tick = callback
