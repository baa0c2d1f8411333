from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _RulesModel(BaseModel):
    # Accept both snake_case and the camelCase names used by embedders.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class ConfidenceWeights(_RulesModel):
    """Blend weights for confidence scoring. Not normalized."""

    rewinds: float = Field(default=0.45, ge=0)
    same_segment: float = Field(default=0.35, ge=0)
    pause_near_rewind: float = Field(default=0.20, ge=0)


class DetectionRules(_RulesModel):
    """
    Detection tuning. Every field has a default; callers override a subset.

    window_ms: fixed retention window. None selects the adaptive window,
        clamp(duration * adaptive_factor, min_window_ms, max_window_ms).
    min_rewind_seconds: smallest backward seek counted as a rewind.
    seek_debounce_ms: seek-ends this close to a recorded rewind are dropped.
    cooldown_ms: minimum spacing between evaluations.
    min_rewinds: rewinds needed before leaving the ok baseline.
    segment_size_seconds: rewind bucket size (at least 5s is enforced).
    pause_near_rewind_seconds: pause within N seconds after the last rewind.
    min_pause_seconds: shorter pauses produce no pause_duration event.
    emit_only_on_state_change: suppress unchanged states until refresh.
    emit_state_refresh_ms: re-emit an unchanged state at most this often.
    """

    window_ms: Annotated[int, Field(gt=0)] | None = None
    adaptive_factor: float = Field(default=0.08, gt=0)
    min_window_ms: int = Field(default=30_000, gt=0)
    max_window_ms: int = Field(default=120_000, gt=0)
    fallback_window_ms: int = Field(default=60_000, gt=0)

    min_rewind_seconds: float = Field(default=2.5, ge=0)
    seek_debounce_ms: int = Field(default=500, ge=0)
    cooldown_ms: int = Field(default=8000, ge=0)
    min_rewinds: int = Field(default=2, ge=0)

    segment_size_seconds: float = Field(default=20, gt=0)

    pause_near_rewind_seconds: float = Field(default=6, ge=0)
    min_pause_seconds: float = Field(default=1.0, ge=0)

    emit_only_on_state_change: bool = True
    emit_state_refresh_ms: int = Field(default=30_000, ge=0)

    weights: ConfidenceWeights = Field(default_factory=ConfidenceWeights)

    @model_validator(mode="after")
    def _check_window_bounds(self) -> "DetectionRules":
        if self.min_window_ms > self.max_window_ms:
            raise ValueError("min_window_ms must not exceed max_window_ms")
        return self
