"""
Window manager models.
"""

from __future__ import annotations

from dataclasses import dataclass

from sciro.components.capture.models import ClassifiedEvent


@dataclass(frozen=True)
class WindowSnapshot:
    """Events retained at `now`, oldest first, plus the window that applied."""

    events: tuple[ClassifiedEvent, ...]
    window_ms: int
    now_ms: int

    @property
    def cutoff_ms(self) -> int:
        return self.now_ms - self.window_ms

    @property
    def rewind_events(self) -> tuple[ClassifiedEvent, ...]:
        return tuple(e for e in self.events if e.is_rewind)
