"""
InsightPublisher - fans an emitted evaluation out to observers.

Three independent deliveries, each isolated from the others and from the
capture pipeline:
1. local on_insight callback (synchronous)
2. DeliveryPort (webhook or simulated)
3. optional UI plugin via UiPresenter
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sciro.components.evaluator.models import Evaluation
from sciro.domain.errors import DeliveryError
from sciro.ports.clock import ClockPort

from ._ui import UiPresenter
from .component import build_payload, isolate, read_page_info
from .models import InsightPayload, PassthroughMetadata
from .ports import DeliveryPort, PageContextPort

logger = logging.getLogger(__name__)


class InsightPublisher:
    def __init__(
        self,
        *,
        clock: ClockPort,
        metadata: PassthroughMetadata,
        delivery: DeliveryPort,
        on_insight: Callable[[InsightPayload], None] | None = None,
        presenter: UiPresenter | None = None,
        page: PageContextPort | None = None,
        debug: bool = False,
    ) -> None:
        self._clock = clock
        self._metadata = metadata
        self._delivery = delivery
        self._on_insight = on_insight
        self._presenter = presenter
        self._page = page
        self._debug = debug

    @property
    def presenter(self) -> UiPresenter | None:
        return self._presenter

    def publish(
        self,
        evaluation: Evaluation,
        *,
        current_time: float | None,
        duration: float | None,
    ) -> InsightPayload:
        payload = build_payload(
            evaluation,
            current_time=current_time,
            duration=duration,
            metadata=self._metadata,
            created_at=self._clock.now_utc(),
            page=read_page_info(self._page),
        )
        if self._debug:
            logger.info(
                "Emitting insight state=%s confidence=%.2f rewinds=%d",
                payload.state.value,
                payload.confidence,
                payload.rewinds,
            )

        if self._on_insight is not None:
            isolate("on_insight", self._on_insight, payload)

        self._deliver(payload)

        if self._presenter is not None:
            self._presenter.present(payload)

        return payload

    def _deliver(self, payload: InsightPayload) -> None:
        try:
            self._delivery.deliver(payload.to_dict())
        except Exception as e:
            err = DeliveryError(f"Delivery failed: {type(e).__name__}: {e}")
            logger.warning("Dropping insight: %s", err, exc_info=e)

    def close(self) -> None:
        if self._presenter is not None:
            self._presenter.close()
