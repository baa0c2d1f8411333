"""
Insight publisher models.

InsightPayload is the canonical, immutable insight snapshot. to_dict()
produces the JSON shape delivered to webhooks (camelCase inside rewind
records, snake_case elsewhere).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sciro.components.evaluator.models import LearnerState

EVENT_TYPE = "insight"
INSIGHT_TYPE = "learner_state"
DEFAULT_CONTAINER_ID = "sciro-alert-root"
DEFAULT_AUTO_DISMISS_MS = 15_000


# --- Payload Parts ---


@dataclass(frozen=True)
class RewindRecord:
    """One rewind as reported in a payload."""

    from_time: float
    to_time: float
    delta: float
    segment: int
    at: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromTime": self.from_time,
            "toTime": self.to_time,
            "delta": self.delta,
            "segment": self.segment,
            "at": self.at,
        }


@dataclass(frozen=True)
class SdkInfo:
    name: str
    version: str


@dataclass(frozen=True)
class PageInfo:
    """Host page context; each field is None when it could not be read."""

    url: str | None = None
    referrer: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class PassthroughMetadata:
    """Opaque identifiers copied into every payload."""

    user_id: str | None = None
    topic: str | None = None
    lesson_id: str | None = None
    session_id: str | None = None


@dataclass(frozen=True)
class InsightPayload:
    """Immutable insight snapshot."""

    state: LearnerState
    confidence: float
    rewinds: int
    last_rewind: RewindRecord | None
    rewinds_in_window: tuple[RewindRecord, ...]
    video_current_time: float
    video_duration: float
    dominant_segment: int | None
    max_segment_rewinds: int
    pause_near_rewind: bool
    metadata: PassthroughMetadata
    window_ms: int
    created_at: str
    sdk: SdkInfo
    page: PageInfo
    event_type: str = EVENT_TYPE
    insight_type: str = INSIGHT_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_type": self.event_type,
            "insight_type": self.insight_type,
            "state": self.state.value,
            "confidence": self.confidence,
            "rewinds": self.rewinds,
            "last_rewind": self.last_rewind.to_dict() if self.last_rewind else None,
            "rewinds_in_window": [r.to_dict() for r in self.rewinds_in_window],
            "video_current_time": self.video_current_time,
            "video_duration": self.video_duration,
            "dominant_segment": self.dominant_segment,
            "max_segment_rewinds": self.max_segment_rewinds,
            "pause_near_rewind": self.pause_near_rewind,
            "user_id": self.metadata.user_id,
            "topic": self.metadata.topic,
            "lesson_id": self.metadata.lesson_id,
            "session_id": self.metadata.session_id,
            "window_ms": self.window_ms,
            "created_at": self.created_at,
            "sdk": {"name": self.sdk.name, "version": self.sdk.version},
            "page": {
                "url": self.page.url,
                "referrer": self.page.referrer,
                "user_agent": self.page.user_agent,
            },
        }


# --- UI Plugin ---


@dataclass(frozen=True)
class RenderActions:
    """Helpers handed to render(); both dismiss the current UI."""

    dismiss: Callable[[], None]
    action: Callable[[str], None]


@dataclass(frozen=True)
class RenderContext:
    insight: InsightPayload
    actions: RenderActions


@dataclass(frozen=True)
class UiPluginConfig:
    """
    Integrator UI plugin.

    render(ctx) returns markup, or None / "" to skip rendering.
    on_action(action, payload) runs after dismissal when an element marked
    with data-sciro="<action>" is clicked.
    """

    render: Callable[[RenderContext], str | None]
    on_action: Callable[[str, InsightPayload], None] | None = None
    container_id: str = DEFAULT_CONTAINER_ID
    auto_dismiss_ms: int = DEFAULT_AUTO_DISMISS_MS
