"""
SignalCapture - binds one playback source to the classifier.

Subscribes a handler per lifecycle signal, reads the source position and the
injected clock, and forwards every classified event to the sink.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sciro.ports.clock import ClockPort
from sciro.rules.models import DetectionRules

from .component import run
from .models import CaptureState, ClassifiedEvent, PlaybackSignal
from .ports import ClassifiedEventSink, PlaybackSourcePort

logger = logging.getLogger(__name__)


class SignalCapture:
    """Per-source signal capture with its own CaptureState."""

    def __init__(
        self,
        source: PlaybackSourcePort,
        *,
        clock: ClockPort,
        rules: DetectionRules,
        sink: ClassifiedEventSink,
        debug: bool = False,
    ) -> None:
        self._source = source
        self._clock = clock
        self._rules = rules
        self._sink = sink
        self._debug = debug
        self.state = CaptureState()
        self._handlers: dict[PlaybackSignal, Callable[[], None]] = {}

    @property
    def attached(self) -> bool:
        return bool(self._handlers)

    def attach(self) -> None:
        """Subscribe to all five playback signals. Idempotent."""
        if self._handlers:
            return
        for signal in PlaybackSignal:
            handler = self._make_handler(signal)
            self._handlers[signal] = handler
            self._source.subscribe(signal, handler)

    def detach(self) -> None:
        for signal, handler in self._handlers.items():
            self._source.unsubscribe(signal, handler)
        self._handlers.clear()

    def handle(self, signal: PlaybackSignal) -> ClassifiedEvent | None:
        """Classify one signal and forward the result to the sink."""
        event = run(
            signal,
            self.state,
            current_time=float(self._source.current_time or 0),
            now_ms=self._clock.now_ms(),
            rules=self._rules,
        )
        if event is None:
            return None

        if self._debug:
            logger.info("Classified %s event: %s", event.type.value, event.metadata)
        self._sink(event)
        return event

    def _make_handler(self, signal: PlaybackSignal) -> Callable[[], None]:
        def handler() -> None:
            self.handle(signal)

        return handler
