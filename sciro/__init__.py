"""
sciro - learner-state detection from video playback signals.

    import sciro

    engine = sciro.init(
        source,
        user_id="u-1",
        on_insight=lambda insight: print(insight.state),
        rules={"minRewinds": 3},
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from sciro._version import __version__
from sciro.app_shell.config import EngineConfig, build_config
from sciro.app_shell.engine import LearnerStateEngine
from sciro.components.capture import ClassifiedEvent, EventType, PlaybackSignal
from sciro.components.capture.ports import PlaybackSourcePort
from sciro.components.evaluator import LearnerState
from sciro.components.publisher import (
    DeliveryPort,
    InsightPayload,
    PageContextPort,
    RenderContext,
    UiHostPort,
    UiPluginConfig,
)
from sciro.domain.errors import (
    ConfigurationError,
    DefensiveReadError,
    DeliveryError,
    IntegrationCallbackError,
)
from sciro.ports.clock import ClockPort
from sciro.ports.scheduler import SchedulerPort
from sciro.rules.loader import load_rules
from sciro.rules.models import ConfidenceWeights, DetectionRules


def init(
    source: PlaybackSourcePort | None = None,
    *,
    user_id: str | None = None,
    topic: str | None = None,
    lesson_id: str | None = None,
    session_id: str | None = None,
    api_endpoint: str | None = None,
    on_insight: Callable[[InsightPayload], None] | None = None,
    debug: bool = False,
    ui: UiPluginConfig | Mapping[str, Any] | None = None,
    rules: DetectionRules | Mapping[str, Any] | None = None,
    clock: ClockPort | None = None,
    scheduler: SchedulerPort | None = None,
    delivery: DeliveryPort | None = None,
    ui_host: UiHostPort | None = None,
    page: PageContextPort | None = None,
) -> LearnerStateEngine:
    """
    Create an engine bound to a playback source and start listening.

    Raises:
        ConfigurationError: missing source or invalid rules
    """
    config = build_config(
        source,
        user_id=user_id,
        topic=topic,
        lesson_id=lesson_id,
        session_id=session_id,
        api_endpoint=api_endpoint,
        on_insight=on_insight,
        debug=debug,
        ui=ui,
        rules=rules,
    )
    return LearnerStateEngine(
        config,
        clock=clock,
        scheduler=scheduler,
        delivery=delivery,
        ui_host=ui_host,
        page=page,
    )


__all__ = [
    "__version__",
    "init",
    # Engine
    "EngineConfig",
    "LearnerStateEngine",
    "build_config",
    # Rules
    "ConfidenceWeights",
    "DetectionRules",
    "load_rules",
    # Models
    "ClassifiedEvent",
    "EventType",
    "InsightPayload",
    "LearnerState",
    "PlaybackSignal",
    "RenderContext",
    "UiPluginConfig",
    # Ports
    "ClockPort",
    "DeliveryPort",
    "PageContextPort",
    "PlaybackSourcePort",
    "SchedulerPort",
    "UiHostPort",
    # Errors
    "ConfigurationError",
    "DefensiveReadError",
    "DeliveryError",
    "IntegrationCallbackError",
]
