"""
Synthetic playback source (PlaybackSourcePort implementation).

Drives the engine without a real player: each helper updates the position
and fires the matching signal synchronously. Pair it with ManualClock to
control timestamps.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable

from sciro.components.capture.models import PlaybackSignal


class SyntheticPlaybackSource:
    def __init__(self, duration: float | None = None, current_time: float = 0.0) -> None:
        self._duration = duration
        self._current_time = float(current_time)
        self._handlers: dict[PlaybackSignal, list[Callable[[], None]]] = defaultdict(list)

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def duration(self) -> float | None:
        return self._duration

    def set_duration(self, duration: float | None) -> None:
        self._duration = duration

    def subscribe(self, signal: PlaybackSignal, handler: Callable[[], None]) -> None:
        self._handlers[signal].append(handler)

    def unsubscribe(self, signal: PlaybackSignal, handler: Callable[[], None]) -> None:
        handlers = self._handlers.get(signal, [])
        if handler in handlers:
            handlers.remove(handler)

    def handler_count(self, signal: PlaybackSignal | None = None) -> int:
        if signal is not None:
            return len(self._handlers.get(signal, []))
        return sum(len(h) for h in self._handlers.values())

    def emit(self, signal: PlaybackSignal) -> None:
        for handler in list(self._handlers.get(signal, [])):
            handler()

    # --- Playback Helpers ---

    def progress(self, position: float) -> None:
        self._current_time = float(position)
        self.emit(PlaybackSignal.PROGRESS)

    def seek_start(self) -> None:
        self.emit(PlaybackSignal.SEEK_START)

    def seek_end(self, position: float) -> None:
        self._current_time = float(position)
        self.emit(PlaybackSignal.SEEK_END)

    def seek(self, position: float) -> None:
        """One complete seek gesture from the current position."""
        self.seek_start()
        self.seek_end(position)

    def pause(self) -> None:
        self.emit(PlaybackSignal.PAUSE)

    def resume(self) -> None:
        self.emit(PlaybackSignal.RESUME)
