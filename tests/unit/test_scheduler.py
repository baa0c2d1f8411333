"""
Unit tests for the timer scheduler adapters.
"""

import threading

from sciro.adapters.clock import ManualClock
from sciro.adapters.scheduler import ManualScheduler, ThreadingScheduler


class TestManualScheduler:
    def test_fires_when_due(self) -> None:
        scheduler = ManualScheduler(ManualClock(0))
        fired: list[str] = []
        scheduler.call_later(1000, lambda: fired.append("a"))

        assert scheduler.advance(999) == 0
        assert scheduler.advance(1) == 1
        assert fired == ["a"]
        assert scheduler.pending_count == 0

    def test_fires_in_due_order(self) -> None:
        scheduler = ManualScheduler(ManualClock(0))
        fired: list[str] = []
        scheduler.call_later(300, lambda: fired.append("late"))
        scheduler.call_later(100, lambda: fired.append("early"))

        scheduler.advance(500)
        assert fired == ["early", "late"]

    def test_cancelled_timer_never_fires(self) -> None:
        scheduler = ManualScheduler(ManualClock(0))
        fired: list[str] = []
        handle = scheduler.call_later(100, lambda: fired.append("x"))
        handle.cancel()

        scheduler.advance(1000)
        assert fired == []
        assert scheduler.pending_count == 0

    def test_timer_scheduled_from_callback(self) -> None:
        clock = ManualClock(0)
        scheduler = ManualScheduler(clock)
        fired: list[int] = []

        def first() -> None:
            fired.append(clock.now_ms())
            scheduler.call_later(100, lambda: fired.append(clock.now_ms()))

        scheduler.call_later(100, first)
        scheduler.advance(100)
        assert scheduler.pending_count == 1
        scheduler.advance(100)
        assert fired == [100, 200]


class TestThreadingScheduler:
    def test_callback_runs(self) -> None:
        done = threading.Event()
        ThreadingScheduler().call_later(1, done.set)
        assert done.wait(timeout=2.0)

    def test_cancel(self) -> None:
        done = threading.Event()
        handle = ThreadingScheduler().call_later(500, done.set)
        handle.cancel()
        assert not done.wait(timeout=0.7)
