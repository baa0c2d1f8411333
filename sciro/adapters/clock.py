import time
from datetime import UTC, datetime


class SystemClock:
    def now_ms(self) -> int:
        return int(time.time() * 1000)

    def now_utc(self) -> datetime:
        return datetime.now(UTC)


class ManualClock:
    """
    Deterministic clock for tests and replays.

    Time only moves when advance() or set() is called.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now_ms = int(start_ms)

    def now_ms(self) -> int:
        return self._now_ms

    def now_utc(self) -> datetime:
        return datetime.fromtimestamp(self._now_ms / 1000, UTC)

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._now_ms += int(ms)
        return self._now_ms

    def set(self, now_ms: int) -> None:
        if now_ms < self._now_ms:
            raise ValueError("ManualClock cannot move backwards")
        self._now_ms = int(now_ms)
