from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    def now_ms(self) -> int:
        """Return current time as integer epoch milliseconds."""
        ...

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...
