"""
Signal capture component - Playback signal classification.
"""

from ._impl import SignalCapture
from .component import (
    classify_pause,
    classify_progress,
    classify_resume,
    classify_seek_end,
    classify_seek_start,
    round2,
    run,
    segment_for,
)
from .models import (
    CaptureState,
    ClassifiedEvent,
    EventMeta,
    EventType,
    PauseDurationMeta,
    PauseMeta,
    PlaybackSignal,
    RewindMeta,
)
from .ports import ClassifiedEventSink, PlaybackSourcePort

__all__ = [
    # Component functions
    "run",
    "classify_progress",
    "classify_seek_start",
    "classify_seek_end",
    "classify_pause",
    "classify_resume",
    # Pure helpers
    "round2",
    "segment_for",
    # Binding
    "SignalCapture",
    # Models
    "CaptureState",
    "ClassifiedEvent",
    "EventMeta",
    "EventType",
    "PauseDurationMeta",
    "PauseMeta",
    "PlaybackSignal",
    "RewindMeta",
    # Ports
    "ClassifiedEventSink",
    "PlaybackSourcePort",
]
