"""
Insight publisher component - Payload assembly and observer fan-out.
"""

from ._impl import InsightPublisher
from ._ui import UiPresenter
from .component import (
    ACTION_ATTRIBUTE,
    DEFAULT_SDK,
    build_payload,
    extract_actions,
    isolate,
    read_page_info,
    rewind_record,
    safe_read,
)
from .models import (
    DEFAULT_AUTO_DISMISS_MS,
    DEFAULT_CONTAINER_ID,
    InsightPayload,
    PageInfo,
    PassthroughMetadata,
    RenderActions,
    RenderContext,
    RewindRecord,
    SdkInfo,
    UiPluginConfig,
)
from .ports import DeliveryPort, PageContextPort, UiHostPort

__all__ = [
    # Services
    "InsightPublisher",
    "UiPresenter",
    # Pure functions
    "build_payload",
    "extract_actions",
    "isolate",
    "read_page_info",
    "rewind_record",
    "safe_read",
    # Constants
    "ACTION_ATTRIBUTE",
    "DEFAULT_AUTO_DISMISS_MS",
    "DEFAULT_CONTAINER_ID",
    "DEFAULT_SDK",
    # Models
    "InsightPayload",
    "PageInfo",
    "PassthroughMetadata",
    "RenderActions",
    "RenderContext",
    "RewindRecord",
    "SdkInfo",
    "UiPluginConfig",
    # Ports
    "DeliveryPort",
    "PageContextPort",
    "UiHostPort",
]
