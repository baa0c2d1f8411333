"""
State evaluator component - Confidence scoring and learner state.
"""

from .component import (
    BASELINE_CONFIDENCE,
    CONFUSED_THRESHOLD,
    compute_confidence,
    did_pause_near,
    dominant_segment,
    run,
    score_signals,
    segment_histogram,
    state_for,
)
from .models import Evaluation, LearnerState, SignalScores

__all__ = [
    # Component functions
    "run",
    # Pure functions
    "compute_confidence",
    "did_pause_near",
    "dominant_segment",
    "score_signals",
    "segment_histogram",
    "state_for",
    # Constants
    "BASELINE_CONFIDENCE",
    "CONFUSED_THRESHOLD",
    # Models
    "Evaluation",
    "LearnerState",
    "SignalScores",
]
