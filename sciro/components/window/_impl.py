"""
EventWindow - ordered, lazily evicted buffer of classified events.

One instance per engine; never shared.
"""

from __future__ import annotations

import bisect

from sciro.components.capture.models import ClassifiedEvent
from sciro.rules.models import DetectionRules

from .component import compute_window_ms, evict
from .models import WindowSnapshot
from .ports import MediaDurationPort


class EventWindow:
    """Time-windowed event buffer bound to a duration provider."""

    def __init__(self, rules: DetectionRules, media: MediaDurationPort | None = None) -> None:
        self._rules = rules
        self._media = media
        self._events: list[ClassifiedEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def window_ms(self) -> int:
        duration = self._media.duration if self._media is not None else None
        return compute_window_ms(self._rules, duration)

    def insert(self, event: ClassifiedEvent, now_ms: int) -> WindowSnapshot:
        """Add an event (kept in timestamp order) and evict stale entries."""
        bisect.insort(self._events, event, key=lambda e: e.timestamp)
        return self.snapshot(now_ms)

    def snapshot(self, now_ms: int) -> WindowSnapshot:
        window_ms = self.window_ms()
        self._events = evict(self._events, now_ms, window_ms)
        return WindowSnapshot(events=tuple(self._events), window_ms=window_ms, now_ms=now_ms)

    def clear(self) -> None:
        self._events.clear()
