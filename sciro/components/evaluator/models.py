"""
State evaluator models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sciro.components.capture.models import ClassifiedEvent


class LearnerState(str, Enum):
    """Discrete learner state, ordered by confidence threshold."""

    OK = "ok"
    STRUGGLING = "struggling"
    CONFUSED = "confused"


@dataclass(frozen=True)
class SignalScores:
    """Normalized component scores, each in [0, 1]."""

    rewind_score: float
    segment_score: float
    pause_score: float


@dataclass(frozen=True)
class Evaluation:
    """
    Result of scoring one window snapshot.

    For the ok baseline dominant_segment is None, max_segment_rewinds is 0
    and pause_near_rewind is False; those signals are not computed there.
    """

    state: LearnerState
    confidence: float
    rewind_count: int
    rewind_events: tuple[ClassifiedEvent, ...]
    max_segment_rewinds: int
    dominant_segment: int | None
    pause_near_rewind: bool
    window_ms: int
    scores: SignalScores | None = None
