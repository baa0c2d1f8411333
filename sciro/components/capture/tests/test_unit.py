"""
Capture component unit tests.

Tests for signal classification, seek debouncing and the source binding.
"""

from __future__ import annotations

import math

import pytest

from sciro.adapters.clock import ManualClock
from sciro.adapters.synthetic_source import SyntheticPlaybackSource
from sciro.components.capture import (
    CaptureState,
    ClassifiedEvent,
    EventType,
    PauseDurationMeta,
    PauseMeta,
    PlaybackSignal,
    RewindMeta,
    SignalCapture,
    classify_pause,
    classify_progress,
    classify_resume,
    classify_seek_end,
    classify_seek_start,
    run,
    segment_for,
)
from sciro.rules.models import DetectionRules

# --- Fixtures ---


@pytest.fixture
def rules() -> DetectionRules:
    return DetectionRules()


@pytest.fixture
def state() -> CaptureState:
    return CaptureState()


# --- Segment Tests ---


class TestSegmentFor:
    """Test segment bucketing."""

    def test_default_bucket(self) -> None:
        assert segment_for(0, 20) == 0
        assert segment_for(19.99, 20) == 0
        assert segment_for(20, 20) == 1
        assert segment_for(65, 20) == 3

    def test_minimum_size_enforced(self) -> None:
        """Sizes below 5s are raised to 5s."""
        assert segment_for(12, 1) == 2

    def test_missing_values(self) -> None:
        assert segment_for(None, 20) == 0
        assert segment_for(45, None) == 2  # default 20s

    @pytest.mark.parametrize("position", [math.nan, math.inf, -math.inf])
    def test_non_finite_position(self, position: float) -> None:
        assert segment_for(position, 20) == 0


# --- Seek Tests ---


class TestSeekClassification:
    """Test rewind detection from seek signals."""

    def test_rewind_detected(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_progress(state, 30.0)
        classify_seek_start(state)
        event = classify_seek_end(state, 26.0, 1000, rules)

        assert event is not None
        assert event.type is EventType.REWIND
        assert event.timestamp == 1000
        assert event.metadata == RewindMeta(from_time=30.0, to_time=26.0, delta=4.0, segment=1)
        assert state.seek_from is None
        assert state.last_seek_recorded_at == 1000

    def test_short_rewind_ignored(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_progress(state, 30.0)
        classify_seek_start(state)
        assert classify_seek_end(state, 28.0, 1000, rules) is None
        assert state.last_seek_recorded_at is None

    def test_forward_seek_ignored(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_progress(state, 30.0)
        classify_seek_start(state)
        assert classify_seek_end(state, 90.0, 1000, rules) is None

    def test_threshold_is_inclusive(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_progress(state, 10.0)
        event = classify_seek_end(state, 7.5, 1000, rules)
        assert event is not None
        assert event.metadata.delta == 2.5

    def test_seek_end_without_seek_start_uses_stable_time(
        self, state: CaptureState, rules: DetectionRules
    ) -> None:
        classify_progress(state, 50.0)
        event = classify_seek_end(state, 40.0, 1000, rules)
        assert event is not None
        assert event.metadata.from_time == 50.0

    def test_progress_ignored_during_seek(self, state: CaptureState) -> None:
        classify_progress(state, 30.0)
        classify_seek_start(state)
        classify_progress(state, 12.0)
        assert state.last_stable_time == 30.0
        assert state.seek_from == 30.0

    def test_repeated_seek_start_keeps_origin(self, state: CaptureState) -> None:
        classify_progress(state, 30.0)
        classify_seek_start(state)
        state.last_stable_time = 99.0
        classify_seek_start(state)
        assert state.seek_from == 30.0

    def test_debounce_collapses_drag(self, state: CaptureState, rules: DetectionRules) -> None:
        """Seek-ends within 500ms of a recorded rewind are dropped."""
        classify_progress(state, 60.0)
        first = classify_seek_end(state, 50.0, 1000, rules)
        classify_progress(state, 50.0)
        second = classify_seek_end(state, 40.0, 1300, rules)

        assert first is not None
        assert second is None
        assert state.last_seek_recorded_at == 1000

    def test_debounce_expires(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_progress(state, 60.0)
        classify_seek_end(state, 50.0, 1000, rules)
        classify_progress(state, 50.0)
        assert classify_seek_end(state, 40.0, 1500, rules) is not None

    def test_debounce_clears_seek_origin(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_progress(state, 60.0)
        classify_seek_end(state, 50.0, 1000, rules)
        classify_seek_start(state)
        classify_seek_end(state, 40.0, 1100, rules)
        assert state.seek_from is None

    def test_non_finite_landing_ignored(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_progress(state, 50.0)
        classify_seek_start(state)
        assert classify_seek_end(state, math.nan, 1000, rules) is None
        assert state.seek_from is None
        assert state.last_seek_recorded_at is None

    def test_values_rounded(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_progress(state, 30.456)
        event = classify_seek_end(state, 20.123, 1000, rules)
        assert event is not None
        assert event.metadata.from_time == 30.46
        assert event.metadata.to_time == 20.12
        assert event.metadata.delta == 10.33


# --- Pause Tests ---


class TestPauseClassification:
    """Test pause and pause-duration events."""

    def test_pause_emitted_immediately(self, state: CaptureState) -> None:
        event = classify_pause(state, 42.123, 5000)
        assert event.type is EventType.PAUSE
        assert event.metadata == PauseMeta(t=42.12)
        assert state.pause_started_at == 5000

    def test_resume_after_long_pause(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_pause(state, 42.0, 5000)
        event = classify_resume(state, 42.0, 7500, rules)
        assert event is not None
        assert event.type is EventType.PAUSE_DURATION
        assert event.metadata == PauseDurationMeta(seconds=2.5, t=42.0)
        assert state.pause_started_at is None

    def test_resume_after_short_pause(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_pause(state, 42.0, 5000)
        assert classify_resume(state, 42.0, 5400, rules) is None
        assert state.pause_started_at is None

    def test_resume_without_pause(self, state: CaptureState, rules: DetectionRules) -> None:
        assert classify_resume(state, 0.0, 1000, rules) is None

    def test_pause_at_time_zero_is_tracked(self, state: CaptureState, rules: DetectionRules) -> None:
        classify_pause(state, 0.0, 0)
        assert classify_resume(state, 0.0, 2000, rules) is not None


# --- Dispatcher Tests ---


class TestRun:
    def test_progress_returns_nothing(self, state: CaptureState, rules: DetectionRules) -> None:
        assert run(PlaybackSignal.PROGRESS, state, current_time=5.0, now_ms=0, rules=rules) is None
        assert state.last_stable_time == 5.0

    def test_dispatches_pause(self, state: CaptureState, rules: DetectionRules) -> None:
        event = run(PlaybackSignal.PAUSE, state, current_time=5.0, now_ms=10, rules=rules)
        assert event is not None
        assert event.type is EventType.PAUSE

    def test_unknown_signal(self, state: CaptureState, rules: DetectionRules) -> None:
        with pytest.raises(ValueError):
            run("scrub", state, current_time=0.0, now_ms=0, rules=rules)  # type: ignore[arg-type]


# --- Binding Tests ---


class TestSignalCapture:
    """Test subscription to a playback source."""

    def test_forwards_events_to_sink(self, rules: DetectionRules) -> None:
        clock = ManualClock(10_000)
        source = SyntheticPlaybackSource(duration=300)
        received: list[ClassifiedEvent] = []
        capture = SignalCapture(source, clock=clock, rules=rules, sink=received.append)
        capture.attach()

        source.progress(30.0)
        clock.advance(1000)
        source.seek(20.0)
        source.pause()

        assert [e.type for e in received] == [EventType.REWIND, EventType.PAUSE]
        assert received[0].timestamp == 11_000

    def test_nan_seek_does_not_escape_handler(self, rules: DetectionRules) -> None:
        source = SyntheticPlaybackSource(duration=300)
        received: list[ClassifiedEvent] = []
        capture = SignalCapture(source, clock=ManualClock(), rules=rules, sink=received.append)
        capture.attach()

        source.progress(50.0)
        source.seek(math.nan)

        assert received == []

    def test_attach_is_idempotent(self, rules: DetectionRules) -> None:
        source = SyntheticPlaybackSource()
        capture = SignalCapture(source, clock=ManualClock(), rules=rules, sink=lambda e: None)
        capture.attach()
        capture.attach()
        assert source.handler_count() == 5

    def test_detach_unsubscribes(self, rules: DetectionRules) -> None:
        source = SyntheticPlaybackSource()
        received: list[ClassifiedEvent] = []
        capture = SignalCapture(source, clock=ManualClock(), rules=rules, sink=received.append)
        capture.attach()
        capture.detach()

        source.pause()
        assert received == []
        assert source.handler_count() == 0
        assert capture.attached is False
