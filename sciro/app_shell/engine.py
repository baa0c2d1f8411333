"""
LearnerStateEngine - one detection engine per playback source.

Composes the components in the order every signal must follow:

    capture -> window insert/evict -> evaluate
            -> emission gates (cooldown, change/refresh) -> publish

Everything mutable (capture tracking, window buffer, emission bookkeeping,
UI timer) is owned by the instance, so several engines can run side by side.
Processing is synchronous; a signal is fully handled before the handler
returns.
"""

from __future__ import annotations

import logging
from types import TracebackType

from sciro.adapters.clock import SystemClock
from sciro.adapters.dev_delivery import DevDelivery
from sciro.adapters.scheduler import ThreadingScheduler
from sciro.adapters.ui_host import InMemoryUiHost
from sciro.adapters.webhook import WebhookDelivery
from sciro.components import emission, evaluator
from sciro.components.capture import ClassifiedEvent, SignalCapture
from sciro.components.emission import EmissionReason, EmissionState
from sciro.components.evaluator import Evaluation
from sciro.components.publisher import (
    DeliveryPort,
    InsightPayload,
    InsightPublisher,
    PageContextPort,
    UiHostPort,
    UiPresenter,
)
from sciro.components.window import EventWindow, WindowSnapshot
from sciro.domain.errors import ConfigurationError
from sciro.ports.clock import ClockPort
from sciro.ports.scheduler import SchedulerPort
from sciro.rules.models import DetectionRules

from .config import EngineConfig

logger = logging.getLogger(__name__)


class LearnerStateEngine:
    """
    Learner-state detection bound to one playback source.

    Usage:
        engine = LearnerStateEngine(build_config(source, on_insight=print))
        ...  # source fires signals
        engine.close()

    Args:
        config: Resolved configuration (see build_config)
        clock: Time source (default SystemClock)
        scheduler: Timer scheduler for UI auto-dismiss (default ThreadingScheduler)
        delivery: Delivery port (default WebhookDelivery if api_endpoint, else DevDelivery)
        ui_host: Surface for the UI plugin (default InMemoryUiHost)
        page: Optional page context for payloads
    """

    def __init__(
        self,
        config: EngineConfig,
        *,
        clock: ClockPort | None = None,
        scheduler: SchedulerPort | None = None,
        delivery: DeliveryPort | None = None,
        ui_host: UiHostPort | None = None,
        page: PageContextPort | None = None,
    ) -> None:
        if config.source is None:
            raise ConfigurationError("sciro requires a playback source")

        self.config = config
        self._source = config.source
        self._clock = clock or SystemClock()
        self._debug = config.debug

        self._window = EventWindow(config.rules, media=config.source)
        self._emission = EmissionState()
        self._last_insight: InsightPayload | None = None
        self._closed = False

        if delivery is None:
            if config.api_endpoint:
                delivery = WebhookDelivery(config.api_endpoint, debug=config.debug)
            else:
                delivery = DevDelivery(debug=config.debug)
        self.delivery = delivery

        presenter = None
        if config.ui is not None:
            presenter = UiPresenter(
                config.ui,
                host=ui_host or InMemoryUiHost(),
                scheduler=scheduler or ThreadingScheduler(),
                debug=config.debug,
            )

        self._publisher = InsightPublisher(
            clock=self._clock,
            metadata=config.metadata,
            delivery=delivery,
            on_insight=config.on_insight,
            presenter=presenter,
            page=page,
            debug=config.debug,
        )

        self._capture = SignalCapture(
            config.source,
            clock=self._clock,
            rules=config.rules,
            sink=self._on_event,
            debug=config.debug,
        )
        self._capture.attach()

    # --- Introspection ---

    @property
    def rules(self) -> DetectionRules:
        return self.config.rules

    @property
    def window_ms(self) -> int:
        return self._window.window_ms()

    @property
    def events(self) -> tuple[ClassifiedEvent, ...]:
        return self._window.snapshot(self._clock.now_ms()).events

    @property
    def emission_state(self) -> EmissionState:
        return self._emission

    @property
    def last_insight(self) -> InsightPayload | None:
        return self._last_insight

    @property
    def presenter(self) -> UiPresenter | None:
        return self._publisher.presenter

    @property
    def closed(self) -> bool:
        return self._closed

    # --- Pipeline ---

    def _on_event(self, event: ClassifiedEvent) -> None:
        if self._closed:
            return
        now = self._clock.now_ms()
        snapshot = self._window.insert(event, now)
        self._evaluate(snapshot, now)

    def _evaluate(self, snapshot: WindowSnapshot, now: int) -> InsightPayload | None:
        rules = self.config.rules
        evaluation = evaluator.run(snapshot, rules)
        decision = emission.run(self._emission, evaluation.state, now, rules)
        if decision.reason is EmissionReason.COOLDOWN:
            return None

        if self._debug:
            logger.info(
                "Evaluated state=%s confidence=%.3f rewinds=%d window_ms=%d -> %s",
                evaluation.state.value,
                evaluation.confidence,
                evaluation.rewind_count,
                evaluation.window_ms,
                decision.reason.value,
            )
        if not decision.emit:
            return None
        return self._publish(evaluation)

    def _publish(self, evaluation: Evaluation) -> InsightPayload:
        payload = self._publisher.publish(
            evaluation,
            current_time=self._source.current_time,
            duration=self._source.duration,
        )
        self._last_insight = payload
        return payload

    # --- Teardown ---

    def close(self) -> None:
        """Unsubscribe from the source, cancel the UI timer, drop the window."""
        if self._closed:
            return
        self._closed = True
        self._capture.detach()
        self._publisher.close()
        self._window.clear()

    def __enter__(self) -> LearnerStateEngine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
