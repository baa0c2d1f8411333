"""
Engine configuration.

build_config() merges every default at construction and performs the only
fatal checks the engine has: a playback source must be present and the
detection rules must validate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sciro.components.capture.ports import PlaybackSourcePort
from sciro.components.publisher.models import (
    DEFAULT_AUTO_DISMISS_MS,
    DEFAULT_CONTAINER_ID,
    InsightPayload,
    PassthroughMetadata,
    UiPluginConfig,
)
from sciro.domain.errors import ConfigurationError
from sciro.rules.loader import merge_rules
from sciro.rules.models import DetectionRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """
    Fully resolved engine configuration.

    source: playback source (required)
    user_id, topic, lesson_id, session_id: passthrough payload metadata
    api_endpoint: webhook URL; None means simulated delivery
    on_insight: local callback receiving each emitted InsightPayload
    debug: diagnostic logging
    ui: optional UI plugin
    rules: detection tuning with defaults merged
    """

    source: PlaybackSourcePort
    rules: DetectionRules = field(default_factory=DetectionRules)
    user_id: str | None = None
    topic: str | None = None
    lesson_id: str | None = None
    session_id: str | None = None
    api_endpoint: str | None = None
    on_insight: Callable[[InsightPayload], None] | None = None
    debug: bool = False
    ui: UiPluginConfig | None = None

    @property
    def metadata(self) -> PassthroughMetadata:
        return PassthroughMetadata(
            user_id=self.user_id,
            topic=self.topic,
            lesson_id=self.lesson_id,
            session_id=self.session_id,
        )


def _pick(options: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        if name in options:
            return options[name]
    return default


def coerce_ui(ui: UiPluginConfig | Mapping[str, Any] | None) -> UiPluginConfig | None:
    """Accept a UiPluginConfig or a mapping (snake_case or camelCase keys)."""
    if ui is None or isinstance(ui, UiPluginConfig):
        return ui

    render = ui.get("render")
    if not callable(render):
        logger.warning("UI plugin ignored: render is not callable")
        return None

    auto_dismiss = _pick(ui, "auto_dismiss_ms", "autoDismissMs", default=DEFAULT_AUTO_DISMISS_MS)
    if not isinstance(auto_dismiss, (int, float)) or isinstance(auto_dismiss, bool):
        auto_dismiss = DEFAULT_AUTO_DISMISS_MS

    return UiPluginConfig(
        render=render,
        on_action=_pick(ui, "on_action", "onAction"),
        container_id=_pick(ui, "container_id", "containerId") or DEFAULT_CONTAINER_ID,
        auto_dismiss_ms=int(auto_dismiss),
    )


def build_config(
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
) -> EngineConfig:
    """
    Build an EngineConfig with all defaults merged.

    Raises:
        ConfigurationError: missing source or invalid rules
    """
    if source is None:
        raise ConfigurationError("sciro requires a playback source")

    return EngineConfig(
        source=source,
        rules=merge_rules(rules),
        user_id=user_id,
        topic=topic,
        lesson_id=lesson_id,
        session_id=session_id,
        api_endpoint=api_endpoint or None,
        on_insight=on_insight,
        debug=bool(debug),
        ui=coerce_ui(ui),
    )
