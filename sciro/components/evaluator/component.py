"""
State evaluator component - Confidence scoring and learner state.

Blends three window signals into a confidence value:
- how many rewinds happened beyond the minimum
- how concentrated they are in one segment of the video
- whether the learner paused right after the last rewind

Confidence is 0.25 below min_rewinds, otherwise in [0.55, 0.95] with the
default weights, and is non-decreasing in every signal.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from sciro.components.capture.models import ClassifiedEvent, RewindMeta
from sciro.components.window.component import clamp
from sciro.components.window.models import WindowSnapshot
from sciro.rules.models import ConfidenceWeights, DetectionRules

from .models import Evaluation, LearnerState, SignalScores

BASELINE_CONFIDENCE = 0.25
CONFIDENCE_FLOOR = 0.55
CONFIDENCE_SPAN = 0.4
CONFUSED_THRESHOLD = 0.75


# --- Pure Functions (Functional Core) ---


def segment_histogram(rewind_events: Sequence[ClassifiedEvent]) -> Counter[int]:
    """Count rewinds per landing segment."""
    counts: Counter[int] = Counter()
    for event in rewind_events:
        meta = event.metadata
        if isinstance(meta, RewindMeta):
            counts[meta.segment] += 1
    return counts


def dominant_segment(histogram: Counter[int]) -> tuple[int | None, int]:
    """
    Pick the segment with the most rewinds.

    Ties go to the lowest segment id so the result never depends on
    insertion order.

    Returns:
        (segment id or None if empty, its rewind count)
    """
    if not histogram:
        return None, 0
    max_count = max(histogram.values())
    segment = min(seg for seg, count in histogram.items() if count == max_count)
    return segment, max_count


def did_pause_near(
    events: Sequence[ClassifiedEvent],
    rewind_timestamp: int | None,
    within_seconds: float,
) -> bool:
    """True if a pause or pause_duration falls in [rewind, rewind + within]."""
    if rewind_timestamp is None:
        return False
    upper = rewind_timestamp + within_seconds * 1000
    return any(e.is_pause and rewind_timestamp <= e.timestamp <= upper for e in events)


def score_signals(
    rewind_count: int,
    max_segment_rewinds: int,
    pause_near: bool,
    min_rewinds: int,
) -> SignalScores:
    return SignalScores(
        rewind_score=clamp((rewind_count - min_rewinds) / 4, 0, 1),
        segment_score=clamp((max_segment_rewinds - 1) / 3, 0, 1),
        pause_score=1.0 if pause_near else 0.0,
    )


def compute_confidence(scores: SignalScores, weights: ConfidenceWeights) -> float:
    """Map blended signal strength onto the 0.55..0.95 confidence band."""
    blended = (
        scores.rewind_score * weights.rewinds
        + scores.segment_score * weights.same_segment
        + scores.pause_score * weights.pause_near_rewind
    )
    return CONFIDENCE_FLOOR + blended * CONFIDENCE_SPAN


def state_for(confidence: float) -> LearnerState:
    """Map a confidence above the baseline to struggling or confused."""
    return LearnerState.CONFUSED if confidence >= CONFUSED_THRESHOLD else LearnerState.STRUGGLING


# --- Component Entry Point ---


def run(snapshot: WindowSnapshot, rules: DetectionRules) -> Evaluation:
    """
    Evaluate the learner state for a window snapshot.

    Args:
        snapshot: Evicted, ordered window contents
        rules: Detection rules (min_rewinds, pause window, weights)

    Returns:
        Evaluation with state, confidence and every derived signal
    """
    rewind_events = snapshot.rewind_events
    rewind_count = len(rewind_events)

    if rewind_count < rules.min_rewinds:
        return Evaluation(
            state=LearnerState.OK,
            confidence=BASELINE_CONFIDENCE,
            rewind_count=rewind_count,
            rewind_events=rewind_events,
            max_segment_rewinds=0,
            dominant_segment=None,
            pause_near_rewind=False,
            window_ms=snapshot.window_ms,
        )

    segment, max_segment_rewinds = dominant_segment(segment_histogram(rewind_events))

    last_rewind = rewind_events[-1] if rewind_events else None
    pause_near = did_pause_near(
        snapshot.events,
        last_rewind.timestamp if last_rewind is not None else None,
        rules.pause_near_rewind_seconds,
    )

    scores = score_signals(rewind_count, max_segment_rewinds, pause_near, rules.min_rewinds)
    confidence = compute_confidence(scores, rules.weights)

    return Evaluation(
        state=state_for(confidence),
        confidence=confidence,
        rewind_count=rewind_count,
        rewind_events=rewind_events,
        max_segment_rewinds=max_segment_rewinds,
        dominant_segment=segment,
        pause_near_rewind=pause_near,
        window_ms=snapshot.window_ms,
        scores=scores,
    )
