"""
Signal capture port definitions.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from .models import ClassifiedEvent, PlaybackSignal


class PlaybackSourcePort(Protocol):
    """A single video playback source."""

    @property
    def current_time(self) -> float:
        """Current playback position in seconds."""
        ...

    @property
    def duration(self) -> float | None:
        """Media duration in seconds; None or NaN while unknown."""
        ...

    def subscribe(self, signal: PlaybackSignal, handler: Callable[[], None]) -> None:
        """Register handler for a lifecycle signal."""
        ...

    def unsubscribe(self, signal: PlaybackSignal, handler: Callable[[], None]) -> None:
        """Remove a handler registered with subscribe()."""
        ...


class ClassifiedEventSink(Protocol):
    """Receives every event produced by classification."""

    def __call__(self, event: ClassifiedEvent) -> None: ...
