"""
UiPresenter - renders insights through the integrator's UI plugin.

Owns the single auto-dismiss timer of an engine instance. A new render
always cancels the pending timer before arming another one.

Timer callbacks may run on another thread (ThreadingScheduler), and a
callback that already started cannot be cancelled. Every armed timer
therefore carries the generation it was armed for, and all UI state and
host calls are serialized on one lock; a timer whose generation is no
longer current does nothing.
"""

from __future__ import annotations

import logging
import threading

from sciro.ports.scheduler import SchedulerPort, TimerHandle

from .component import isolate
from .models import InsightPayload, RenderActions, RenderContext, UiPluginConfig
from .ports import UiHostPort

logger = logging.getLogger(__name__)


class UiPresenter:
    def __init__(
        self,
        plugin: UiPluginConfig,
        *,
        host: UiHostPort,
        scheduler: SchedulerPort,
        debug: bool = False,
    ) -> None:
        self._plugin = plugin
        self._host = host
        self._scheduler = scheduler
        self._debug = debug
        self._lock = threading.RLock()
        self._container_id: str | None = None
        self._dismiss_timer: TimerHandle | None = None
        self._generation = 0
        self._mounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def has_pending_timer(self) -> bool:
        return self._dismiss_timer is not None

    def present(self, insight: InsightPayload) -> bool:
        """
        Render an insight.

        Returns:
            True if markup was mounted
        """
        with self._lock:
            self._ensure_container()

            ctx = RenderContext(
                insight=insight,
                actions=RenderActions(
                    dismiss=lambda: self.dismiss("dismiss", insight),
                    action=lambda name: self.dismiss(name, insight),
                ),
            )
            ok, markup = isolate("ui.render", self._plugin.render, ctx)
            if not ok or not markup:
                return False

            mounted, _ = isolate(
                "ui.mount",
                self._host.mount,
                self._plugin.container_id,
                markup,
                lambda action: self._handle_click(action, insight),
            )
            if not mounted:
                return False
            self._mounted = True

            self._cancel_timer()
            auto_ms = self._plugin.auto_dismiss_ms
            if auto_ms > 0:
                generation = self._generation
                self._dismiss_timer = self._scheduler.call_later(
                    auto_ms, lambda: self._auto_dismiss(generation, insight)
                )
            return True

    def dismiss(self, reason: str, insight: InsightPayload | None = None) -> None:
        with self._lock:
            if self._container_id is None:
                return
            self._cancel_timer()
            isolate("ui.clear", self._host.clear, self._container_id)
            self._mounted = False
        if self._debug:
            logger.info(
                "UI action: %s (state=%s)",
                reason,
                insight.state.value if insight is not None else None,
            )

    def close(self) -> None:
        with self._lock:
            self._cancel_timer()
            if self._mounted:
                self.dismiss("teardown")

    def _auto_dismiss(self, generation: int, insight: InsightPayload) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.dismiss("auto_dismiss", insight)

    def _handle_click(self, action: str, insight: InsightPayload) -> None:
        self.dismiss(action, insight)
        if self._plugin.on_action is not None:
            isolate("ui.on_action", self._plugin.on_action, action, insight)

    def _ensure_container(self) -> None:
        if self._container_id is not None:
            return
        isolate("ui.ensure_container", self._host.ensure_container, self._plugin.container_id)
        self._container_id = self._plugin.container_id

    def _cancel_timer(self) -> None:
        # Invalidates the armed timer even if its callback is already running.
        self._generation += 1
        if self._dismiss_timer is not None:
            self._dismiss_timer.cancel()
            self._dismiss_timer = None
