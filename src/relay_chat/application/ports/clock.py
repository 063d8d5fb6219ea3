from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """UTC wall clock whose readings never go backwards.

    If the host clock is stepped back (NTP correction, manual change), the
    last reading is repeated until wall time catches up again.
    """

    def __init__(self) -> None:
        self._last: datetime | None = None
        self._lock = threading.Lock()

    def _wall(self) -> datetime:
        return datetime.now(timezone.utc)

    def now(self) -> datetime:
        wall = self._wall()
        with self._lock:
            if self._last is not None and wall < self._last:
                return self._last
            self._last = wall
            return wall


system_clock = SystemClock()
