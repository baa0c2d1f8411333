"""
Signal capture models.

Raw playback signals come in; immutable classified events go out.
CaptureState is the only mutable piece and belongs to one engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# --- Enums ---


class PlaybackSignal(str, Enum):
    """Playback lifecycle notifications a source can emit."""

    PROGRESS = "progress"
    SEEK_START = "seek_start"
    SEEK_END = "seek_end"
    PAUSE = "pause"
    RESUME = "resume"


class EventType(str, Enum):
    """Classified interaction event types."""

    REWIND = "rewind"
    PAUSE = "pause"
    PAUSE_DURATION = "pause_duration"


# --- Event Metadata ---


@dataclass(frozen=True)
class RewindMeta:
    """Backward seek. Times in seconds, rounded to 2 decimals."""

    from_time: float
    to_time: float
    delta: float
    segment: int


@dataclass(frozen=True)
class PauseMeta:
    """Playback position when the pause started."""

    t: float


@dataclass(frozen=True)
class PauseDurationMeta:
    """Completed pause, emitted on resume."""

    seconds: float
    t: float


EventMeta = RewindMeta | PauseMeta | PauseDurationMeta


@dataclass(frozen=True)
class ClassifiedEvent:
    """A meaningful interaction event. Timestamp in epoch ms."""

    type: EventType
    metadata: EventMeta
    timestamp: int

    @property
    def is_rewind(self) -> bool:
        return self.type is EventType.REWIND

    @property
    def is_pause(self) -> bool:
        return self.type in (EventType.PAUSE, EventType.PAUSE_DURATION)


# --- Per-instance State ---


@dataclass
class CaptureState:
    """Seek and pause tracking for one playback source."""

    last_stable_time: float = 0.0
    seek_from: float | None = None
    last_seek_recorded_at: int | None = None
    pause_started_at: int | None = None
