"""
Window manager component - Retention window sizing and eviction.
"""

from ._impl import EventWindow
from .component import clamp, compute_window_ms, evict
from .models import WindowSnapshot
from .ports import MediaDurationPort

__all__ = [
    # Pure functions
    "clamp",
    "compute_window_ms",
    "evict",
    # Buffer
    "EventWindow",
    # Models
    "WindowSnapshot",
    # Ports
    "MediaDurationPort",
]
