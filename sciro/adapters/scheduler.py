"""
Timer scheduler adapters.

- ThreadingScheduler: real timers on daemon threads (threading.Timer)
- ManualScheduler: timers fire only when the paired ManualClock is advanced
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from sciro.adapters.clock import ManualClock


class _ThreadingTimerHandle:
    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingScheduler:
    """
    Schedules callbacks on daemon threading.Timer instances.

    Callbacks run off the signal thread; hosts that need strict
    single-threaded delivery should pass a scheduler bound to their loop.
    """

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _ThreadingTimerHandle:
        timer = threading.Timer(delay_ms / 1000, callback)
        timer.daemon = True
        timer.start()
        return _ThreadingTimerHandle(timer)


@dataclass
class ManualTimer:
    """Pending timer record for ManualScheduler."""

    due_ms: int
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """
    Deterministic scheduler driven by a ManualClock.

    advance() moves the clock and fires every timer that became due,
    in due order.
    """

    clock: ManualClock
    timers: list[ManualTimer] = field(default_factory=list)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(due_ms=self.clock.now_ms() + int(delay_ms), callback=callback)
        self.timers.append(timer)
        return timer

    def run_due(self) -> int:
        """Fire due timers. Returns how many fired."""
        now = self.clock.now_ms()
        due = sorted(
            (t for t in self.timers if not t.cancelled and not t.fired and t.due_ms <= now),
            key=lambda t: t.due_ms,
        )
        for timer in due:
            timer.fired = True
            timer.callback()
        self.timers = [t for t in self.timers if not t.cancelled and not t.fired]
        return len(due)

    def advance(self, ms: int) -> int:
        self.clock.advance(ms)
        return self.run_due()

    @property
    def pending_count(self) -> int:
        return sum(1 for t in self.timers if not t.cancelled and not t.fired)
