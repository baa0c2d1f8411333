"""
Timer scheduling port.

The engine owns at most one pending timer (UI auto-dismiss). Hosts with
their own event loop can supply an adapter that schedules on that loop.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Cancel the timer. Cancelling a fired or cancelled timer is a no-op."""
        ...


class SchedulerPort(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay_ms milliseconds."""
        ...
