"""
Insight publisher component - Payload assembly and call isolation.

Builds the canonical InsightPayload from an Evaluation and provides the
isolation helpers the publisher uses around integrator code.

Invariants:
- Payloads are immutable once built
- Integrator callables never propagate exceptions into the pipeline
- Page context fields degrade to None instead of raising
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from html.parser import HTMLParser
from typing import Any, TypeVar

from sciro._version import __version__
from sciro.components.capture.component import round2
from sciro.components.capture.models import ClassifiedEvent, RewindMeta
from sciro.components.evaluator.models import Evaluation
from sciro.domain.errors import IntegrationCallbackError

from .models import (
    InsightPayload,
    PageInfo,
    PassthroughMetadata,
    RewindRecord,
    SdkInfo,
)
from .ports import PageContextPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

SDK_NAME = "sciro"
DEFAULT_SDK = SdkInfo(name=SDK_NAME, version=__version__)
ACTION_ATTRIBUTE = "data-sciro"
UNKNOWN_ACTION = "unknown"


# --- Isolation ---


def isolate(call_site: str, fn: Callable[..., T], *args: Any) -> tuple[bool, T | None]:
    """
    Call integrator code, containing any exception.

    Returns:
        (True, result) on success, (False, None) if fn raised
    """
    try:
        return True, fn(*args)
    except Exception as e:
        err = IntegrationCallbackError(call_site, e)
        logger.warning("Ignoring integrator failure: %s", err, exc_info=e)
        return False, None


def safe_read(field_name: str, reader: Callable[[], str | None]) -> str | None:
    """Best-effort read of optional context; failures become None."""
    try:
        return reader()
    except Exception as e:
        logger.debug("Page context %s unavailable: %s", field_name, e)
        return None


def read_page_info(page: PageContextPort | None) -> PageInfo:
    if page is None:
        return PageInfo()
    return PageInfo(
        url=safe_read("url", page.url),
        referrer=safe_read("referrer", page.referrer) or None,
        user_agent=safe_read("user_agent", page.user_agent),
    )


# --- Payload Assembly ---


def rewind_record(event: ClassifiedEvent) -> RewindRecord:
    meta = event.metadata
    if not isinstance(meta, RewindMeta):
        raise ValueError(f"Not a rewind event: {event.type.value}")
    return RewindRecord(
        from_time=meta.from_time,
        to_time=meta.to_time,
        delta=meta.delta,
        segment=meta.segment,
        at=event.timestamp,
    )


def build_payload(
    evaluation: Evaluation,
    *,
    current_time: float | None,
    duration: float | None,
    metadata: PassthroughMetadata,
    created_at: datetime,
    page: PageInfo,
    sdk: SdkInfo = DEFAULT_SDK,
) -> InsightPayload:
    """
    Assemble the canonical insight payload.

    Args:
        evaluation: Evaluator output
        current_time: Playback position in seconds
        duration: Media duration in seconds (None/NaN reported as 0)
        metadata: Passthrough identifiers
        created_at: Creation time (UTC)
        page: Host page context

    Returns:
        Immutable InsightPayload
    """
    rewinds_in_window = tuple(rewind_record(e) for e in evaluation.rewind_events)

    return InsightPayload(
        state=evaluation.state,
        confidence=round2(evaluation.confidence),
        rewinds=evaluation.rewind_count,
        last_rewind=rewinds_in_window[-1] if rewinds_in_window else None,
        rewinds_in_window=rewinds_in_window,
        video_current_time=round2(current_time),
        video_duration=round2(duration),
        dominant_segment=evaluation.dominant_segment,
        max_segment_rewinds=evaluation.max_segment_rewinds,
        pause_near_rewind=evaluation.pause_near_rewind,
        metadata=metadata,
        window_ms=evaluation.window_ms,
        created_at=created_at.isoformat(),
        sdk=sdk,
        page=page,
    )


# --- UI Markup ---


class _ActionMarkerParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.actions: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        for name, value in attrs:
            if name == ACTION_ATTRIBUTE:
                self.actions.append(value or UNKNOWN_ACTION)


def extract_actions(markup: str) -> tuple[str, ...]:
    """List action names of elements marked with data-sciro, in document order."""
    parser = _ActionMarkerParser()
    parser.feed(markup)
    parser.close()
    return tuple(parser.actions)
