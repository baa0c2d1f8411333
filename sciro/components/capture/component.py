"""
Signal capture component - Playback signal classification.

Turns raw playback lifecycle signals into rewind / pause / pause_duration
events. All tracking lives in an explicit CaptureState so each engine
instance classifies independently.

Invariants:
- last_stable_time only moves on progress while no seek is tracked
- One drag gesture (several seek-ends inside seek_debounce_ms of a recorded
  rewind) yields at most one rewind
- Forward or short seeks never touch the debounce timestamp
"""

from __future__ import annotations

import math

from sciro.rules.models import DetectionRules

from .models import (
    CaptureState,
    ClassifiedEvent,
    EventType,
    PauseDurationMeta,
    PauseMeta,
    PlaybackSignal,
    RewindMeta,
)

MIN_SEGMENT_SIZE_SECONDS = 5.0
DEFAULT_SEGMENT_SIZE_SECONDS = 20.0


# --- Pure Functions (Functional Core) ---


def round2(value: float | None) -> float:
    """Round to 2 decimals; None and NaN become 0.0."""
    if value is None:
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return round(value, 2)


def segment_for(time_seconds: float | None, segment_size_seconds: float | None) -> int:
    """
    Bucket a playback position into a fixed-size segment.

    Args:
        time_seconds: Playback position
        segment_size_seconds: Bucket size; values below 5s are raised to 5s

    Returns:
        Zero-based segment index
    """
    t = float(time_seconds or 0)
    if not math.isfinite(t):
        t = 0.0
    size = max(MIN_SEGMENT_SIZE_SECONDS, float(segment_size_seconds or DEFAULT_SEGMENT_SIZE_SECONDS))
    return math.floor(t / size)


def classify_progress(state: CaptureState, current_time: float) -> None:
    """Record a stable position unless a seek is in flight."""
    if state.seek_from is None:
        state.last_stable_time = current_time


def classify_seek_start(state: CaptureState) -> None:
    """Remember where a seek started; repeated seek-starts keep the first."""
    if state.seek_from is None:
        state.seek_from = state.last_stable_time


def classify_seek_end(
    state: CaptureState,
    current_time: float,
    now_ms: int,
    rules: DetectionRules,
) -> ClassifiedEvent | None:
    """
    Classify a completed seek.

    Args:
        state: Capture state (seek_from is always cleared)
        current_time: Position the seek landed on
        now_ms: Current time
        rules: Detection rules

    Returns:
        A rewind event, or None for debounced, forward, short or non-finite seeks
    """
    to_time = current_time
    from_time = state.seek_from if state.seek_from is not None else state.last_stable_time
    state.seek_from = None

    delta = from_time - to_time

    if (
        state.last_seek_recorded_at is not None
        and now_ms - state.last_seek_recorded_at < rules.seek_debounce_ms
    ):
        return None

    if not math.isfinite(delta) or delta < rules.min_rewind_seconds:
        return None

    state.last_seek_recorded_at = now_ms
    return ClassifiedEvent(
        type=EventType.REWIND,
        metadata=RewindMeta(
            from_time=round2(from_time),
            to_time=round2(to_time),
            delta=round2(delta),
            segment=segment_for(to_time, rules.segment_size_seconds),
        ),
        timestamp=now_ms,
    )


def classify_pause(state: CaptureState, current_time: float, now_ms: int) -> ClassifiedEvent:
    """Start a pause and report it immediately."""
    state.pause_started_at = now_ms
    return ClassifiedEvent(
        type=EventType.PAUSE,
        metadata=PauseMeta(t=round2(current_time)),
        timestamp=now_ms,
    )


def classify_resume(
    state: CaptureState,
    current_time: float,
    now_ms: int,
    rules: DetectionRules,
) -> ClassifiedEvent | None:
    """Close an active pause; long enough pauses become pause_duration events."""
    if state.pause_started_at is None:
        return None

    seconds = (now_ms - state.pause_started_at) / 1000
    state.pause_started_at = None

    if seconds < rules.min_pause_seconds:
        return None

    return ClassifiedEvent(
        type=EventType.PAUSE_DURATION,
        metadata=PauseDurationMeta(seconds=round2(seconds), t=round2(current_time)),
        timestamp=now_ms,
    )


# --- Component Entry Point ---


def run(
    signal: PlaybackSignal,
    state: CaptureState,
    *,
    current_time: float,
    now_ms: int,
    rules: DetectionRules,
) -> ClassifiedEvent | None:
    """
    Main entry point for the capture component.

    Dispatches a raw signal to its classifier.

    Returns:
        The classified event, or None when the signal produced nothing
    """
    if signal is PlaybackSignal.PROGRESS:
        classify_progress(state, current_time)
        return None
    elif signal is PlaybackSignal.SEEK_START:
        classify_seek_start(state)
        return None
    elif signal is PlaybackSignal.SEEK_END:
        return classify_seek_end(state, current_time, now_ms, rules)
    elif signal is PlaybackSignal.PAUSE:
        return classify_pause(state, current_time, now_ms)
    elif signal is PlaybackSignal.RESUME:
        return classify_resume(state, current_time, now_ms, rules)
    else:
        raise ValueError(f"Unknown playback signal: {signal!r}")
