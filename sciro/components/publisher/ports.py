"""
Insight publisher port definitions.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class DeliveryPort(Protocol):
    """Outbound insight delivery. Must never raise."""

    def deliver(self, payload: dict[str, Any]) -> None:
        """Hand off a JSON-ready payload."""
        ...


class UiHostPort(Protocol):
    """
    Surface that displays rendered markup.

    The host delegates clicks: a click on any element carrying
    data-sciro="<action>" calls on_action(<action>) (or "unknown" when the
    attribute is empty).
    """

    def ensure_container(self, container_id: str) -> None:
        """Create the container if it does not exist yet."""
        ...

    def mount(
        self,
        container_id: str,
        markup: str,
        on_action: Callable[[str], None],
    ) -> None:
        """Replace the container content and wire click delegation."""
        ...

    def clear(self, container_id: str) -> None:
        """Empty the container and drop its click wiring."""
        ...


class PageContextPort(Protocol):
    """Host page context. Any accessor may raise."""

    def url(self) -> str | None: ...

    def referrer(self) -> str | None: ...

    def user_agent(self) -> str | None: ...
