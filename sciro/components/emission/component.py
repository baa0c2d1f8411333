"""
Emission policy component - Evaluation throttling and notify decisions.

Two gates:
- Cooldown: an evaluation counts only if cooldown_ms passed since the previous
  evaluation, whatever that evaluation decided
- Change/refresh: with emit_only_on_state_change, an unchanged state is
  re-emitted at most once per emit_state_refresh_ms
"""

from __future__ import annotations

from sciro.components.evaluator.models import LearnerState
from sciro.rules.models import DetectionRules

from .models import EmissionDecision, EmissionReason, EmissionState

# --- Pure Functions (Functional Core) ---


def cooldown_elapsed(state: EmissionState, now_ms: int, rules: DetectionRules) -> bool:
    """Gate 1. The first evaluation is always allowed."""
    if state.last_evaluated_at is None:
        return True
    return now_ms - state.last_evaluated_at >= rules.cooldown_ms


def decide(
    state: EmissionState,
    learner_state: LearnerState,
    now_ms: int,
    rules: DetectionRules,
) -> EmissionDecision:
    """Gate 2. Decide whether an evaluation result is emitted."""
    if not rules.emit_only_on_state_change:
        return EmissionDecision(emit=True, reason=EmissionReason.ALWAYS)

    if learner_state != state.last_emitted_state:
        return EmissionDecision(emit=True, reason=EmissionReason.STATE_CHANGED)

    if state.last_emitted_at is None or now_ms - state.last_emitted_at >= rules.emit_state_refresh_ms:
        return EmissionDecision(emit=True, reason=EmissionReason.REFRESH)

    return EmissionDecision(emit=False, reason=EmissionReason.SUPPRESSED)


def record_evaluation(state: EmissionState, now_ms: int) -> None:
    state.last_evaluated_at = now_ms


def record_emission(state: EmissionState, learner_state: LearnerState, now_ms: int) -> None:
    state.last_emitted_state = learner_state
    state.last_emitted_at = now_ms


# --- Component Entry Point ---


def run(
    state: EmissionState,
    learner_state: LearnerState,
    now_ms: int,
    rules: DetectionRules,
) -> EmissionDecision:
    """
    Apply both gates to one evaluation and update the bookkeeping.

    Args:
        state: Per-instance emission state (mutated)
        learner_state: State produced by the evaluator
        now_ms: Current time
        rules: Detection rules

    Returns:
        EmissionDecision; reason COOLDOWN means the evaluation did not count
    """
    if not cooldown_elapsed(state, now_ms, rules):
        return EmissionDecision(emit=False, reason=EmissionReason.COOLDOWN)

    record_evaluation(state, now_ms)
    decision = decide(state, learner_state, now_ms, rules)
    if decision.emit:
        record_emission(state, learner_state, now_ms)
    return decision
