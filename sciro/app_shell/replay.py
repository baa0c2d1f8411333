"""
Scenario replay - drive an engine through a scripted signal sequence.

A scenario is YAML:

    duration: 600          # media duration in seconds (optional)
    rules: {minRewinds: 2} # detection overrides (optional)
    metadata: {user_id: u-1}
    steps:
      - {at_ms: 0, signal: progress, position: 30}
      - {at_ms: 1000, signal: seek, position: 26}
      - {at_ms: 9000, signal: pause}

at_ms is relative to the scenario start and must not decrease. `seek`
is a full seek-start/seek-end gesture; `wait` only advances the clock
(firing due UI timers).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from sciro.adapters.clock import ManualClock
from sciro.adapters.dev_delivery import DevDelivery
from sciro.adapters.scheduler import ManualScheduler
from sciro.adapters.synthetic_source import SyntheticPlaybackSource
from sciro.components.publisher.models import InsightPayload
from sciro.domain.errors import ConfigurationError

from .config import build_config
from .engine import LearnerStateEngine

StepSignal = Literal["progress", "seek_start", "seek_end", "seek", "pause", "resume", "wait"]


class ReplayStep(BaseModel):
    model_config = ConfigDict(extra="forbid")

    at_ms: int = Field(ge=0)
    signal: StepSignal
    position: float | None = None


class ReplayMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: str | None = None
    topic: str | None = None
    lesson_id: str | None = None
    session_id: str | None = None


class ReplayScenario(BaseModel):
    model_config = ConfigDict(extra="forbid")

    duration: float | None = None
    start_ms: int = Field(default=1_700_000_000_000, ge=0)
    rules: dict[str, Any] = Field(default_factory=dict)
    metadata: ReplayMetadata = Field(default_factory=ReplayMetadata)
    steps: list[ReplayStep] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_steps(self) -> ReplayScenario:
        last = 0
        for step in self.steps:
            if step.at_ms < last:
                raise ValueError("steps must be ordered by at_ms")
            last = step.at_ms
            if step.signal in ("seek", "seek_end") and step.position is None:
                raise ValueError(f"{step.signal} step at {step.at_ms}ms needs a position")
        return self


def load_scenario(path: Path) -> ReplayScenario:
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found at: {path}")
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in scenario: {e}") from e
    try:
        return ReplayScenario.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Scenario validation failed:\n{e}") from e


def run_scenario(scenario: ReplayScenario, *, debug: bool = False) -> list[InsightPayload]:
    """Replay a scenario on a fresh engine. Returns every emitted insight."""
    clock = ManualClock(scenario.start_ms)
    scheduler = ManualScheduler(clock)
    source = SyntheticPlaybackSource(duration=scenario.duration)
    insights: list[InsightPayload] = []

    config = build_config(
        source,
        rules=scenario.rules,
        on_insight=insights.append,
        debug=debug,
        **scenario.metadata.model_dump(),
    )
    with LearnerStateEngine(
        config,
        clock=clock,
        scheduler=scheduler,
        delivery=DevDelivery(debug=debug),
    ):
        for step in scenario.steps:
            scheduler.advance(scenario.start_ms + step.at_ms - clock.now_ms())
            _apply(source, step)

    return insights


def _apply(source: SyntheticPlaybackSource, step: ReplayStep) -> None:
    position = step.position
    if step.signal == "progress":
        source.progress(position if position is not None else source.current_time)
    elif step.signal == "seek_start":
        source.seek_start()
    elif step.signal == "seek_end":
        source.seek_end(position)
    elif step.signal == "seek":
        source.seek(position)
    elif step.signal == "pause":
        source.pause()
    elif step.signal == "resume":
        source.resume()
