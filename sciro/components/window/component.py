"""
Window manager component - Retention window sizing and eviction.

The window is either fixed or scaled to media length. Duration often becomes
known only after playback starts, so the length is recomputed on every call
rather than cached.

Invariants:
- Retained events satisfy timestamp >= now - window_ms
- Eviction happens on insertion and snapshot, never on a timer
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from sciro.components.capture.models import ClassifiedEvent
from sciro.rules.models import DetectionRules

# --- Pure Functions (Functional Core) ---


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def compute_window_ms(rules: DetectionRules, duration: float | None) -> int:
    """
    Resolve the active window length.

    Args:
        rules: Detection rules (window_ms set means fixed window)
        duration: Media duration in seconds, if known

    Returns:
        Window length in milliseconds
    """
    if rules.window_ms is not None:
        return rules.window_ms

    try:
        seconds = float(duration) if duration is not None else 0.0
    except (TypeError, ValueError):
        seconds = 0.0

    if not seconds or not math.isfinite(seconds) or seconds < 0:
        return rules.fallback_window_ms

    ms = round(seconds * rules.adaptive_factor * 1000)
    return int(clamp(ms, rules.min_window_ms, rules.max_window_ms))


def evict(
    events: Iterable[ClassifiedEvent],
    now_ms: int,
    window_ms: int,
) -> list[ClassifiedEvent]:
    """Drop events older than now - window_ms. Order is preserved."""
    cutoff = now_ms - window_ms
    return [e for e in events if e.timestamp >= cutoff]
