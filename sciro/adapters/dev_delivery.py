"""
Dev Delivery Adapter (DeliveryPort implementation).

Used when no endpoint is configured. Records payloads instead of
POSTing them; under debug, logs what would have been sent.

Key behaviors:
- No network call, ever
- Stores payloads in memory for test assertions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class DevDelivery:
    """Simulated delivery that logs instead of sending."""

    delivered: list[dict[str, Any]] = field(default_factory=list)
    debug: bool = False
    max_kept: int = 100

    def deliver(self, payload: dict[str, Any]) -> None:
        self.delivered.append(payload)
        if len(self.delivered) > self.max_kept:
            del self.delivered[0]
        if self.debug:
            logger.info(
                "(SIMULATED) Would POST insight state=%s confidence=%s",
                payload.get("state"),
                payload.get("confidence"),
            )

    # --- Test Helper Methods ---

    def get_last(self) -> dict[str, Any] | None:
        return self.delivered[-1] if self.delivered else None

    def clear(self) -> None:
        self.delivered.clear()

    @property
    def count(self) -> int:
        return len(self.delivered)
