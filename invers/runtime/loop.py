"""Cooperative loop driving periodic timers.

All timers run on one thread. Each due callback runs to completion before
the next one starts, so timers never interleave.
"""

import time
from datetime import datetime, timedelta
from typing import Callable, Optional


class PeriodicTimer:
    """A callback invoked every ``interval`` seconds while active."""

    def __init__(self, name: str, interval: float, callback: Callable[[datetime], object]):
        """Initialize the timer.

        Args:
            name: Label used in reprs and logs.
            interval: Seconds between invocations.
            callback: Called with the current time when the timer fires.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.name = name
        self.interval = interval
        self._callback = callback
        self._next_due: Optional[datetime] = None

    @property
    def active(self) -> bool:
        """Whether the timer is started and not cancelled."""
        return self._next_due is not None

    @property
    def next_due(self) -> Optional[datetime]:
        """When the timer fires next, or None if inactive."""
        return self._next_due

    def start(self, now: datetime) -> None:
        """Schedule the first firing one interval from now."""
        self._next_due = now + timedelta(seconds=self.interval)

    def cancel(self) -> None:
        """Stop the timer."""
        self._next_due = None

    def is_due(self, now: datetime) -> bool:
        return self._next_due is not None and now >= self._next_due

    def fire(self, now: datetime) -> None:
        """Run the callback and schedule the next firing."""
        self._callback(now)
        if self._next_due is None:
            # Cancelled from inside the callback
            return
        self._next_due += timedelta(seconds=self.interval)
        if self._next_due <= now:
            # Missed ticks are dropped, not replayed
            self._next_due = now + timedelta(seconds=self.interval)

    def __repr__(self) -> str:
        return f"PeriodicTimer({self.name!r}, interval={self.interval}, next_due={self._next_due})"


class CooperativeLoop:
    """Runs due timers one after another on the calling thread."""

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._clock = clock
        self._sleep = sleep
        self._timers: list[PeriodicTimer] = []
        self._running = False

    @property
    def timers(self) -> list[PeriodicTimer]:
        """Active timers."""
        return [timer for timer in self._timers if timer.active]

    @property
    def running(self) -> bool:
        return self._running

    def add(self, timer: PeriodicTimer, now: Optional[datetime] = None) -> None:
        """Start a timer and register it with the loop."""
        timer.start(now or self._clock())
        if timer not in self._timers:
            self._timers.append(timer)

    def remove(self, timer: PeriodicTimer) -> None:
        """Cancel a timer and drop it from the loop."""
        timer.cancel()
        if timer in self._timers:
            self._timers.remove(timer)

    def run_pending(self, now: Optional[datetime] = None) -> int:
        """Fire every due timer once.

        Args:
            now: Current time; read from the clock if omitted.

        Returns:
            Number of timers fired.
        """
        now = now or self._clock()
        fired = 0
        for timer in list(self._timers):
            if timer.is_due(now):
                timer.fire(now)
                fired += 1
        self._timers = [timer for timer in self._timers if timer.active]
        return fired

    def seconds_until_next(self, now: Optional[datetime] = None) -> Optional[float]:
        """Seconds until the earliest due timer, or None with no timers."""
        now = now or self._clock()
        due = [timer.next_due for timer in self._timers if timer.next_due is not None]
        if not due:
            return None
        return max((min(due) - now).total_seconds(), 0.0)

    def run_forever(self, on_cycle: Optional[Callable[[], None]] = None) -> None:
        """Run timers until stop() is called or none remain.

        Args:
            on_cycle: Called after each batch of fired timers.
        """
        self._running = True
        try:
            while self._running:
                delay = self.seconds_until_next()
                if delay is None:
                    break
                if delay > 0:
                    self._sleep(delay)
                if self.run_pending() and on_cycle is not None:
                    on_cycle()
        finally:
            self._running = False

    def stop(self) -> None:
        """Make run_forever return after the current cycle."""
        self._running = False
