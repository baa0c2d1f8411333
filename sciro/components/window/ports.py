"""
Window manager port definitions.
"""

from __future__ import annotations

from typing import Protocol


class MediaDurationPort(Protocol):
    """Anything that knows the media duration (usually the playback source)."""

    @property
    def duration(self) -> float | None:
        """Duration in seconds; None or NaN while unknown."""
        ...
