"""
Emission policy models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sciro.components.evaluator.models import LearnerState


class EmissionReason(str, Enum):
    """Why an evaluation was or was not emitted."""

    STATE_CHANGED = "state_changed"
    REFRESH = "refresh"
    ALWAYS = "always"
    SUPPRESSED = "suppressed"
    COOLDOWN = "cooldown"


@dataclass
class EmissionState:
    """Per-instance evaluation and emission bookkeeping. None means never."""

    last_evaluated_at: int | None = None
    last_emitted_state: LearnerState | None = None
    last_emitted_at: int | None = None


@dataclass(frozen=True)
class EmissionDecision:
    emit: bool
    reason: EmissionReason
