from __future__ import annotations

import time
from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.application.ports.clock import ClockPort


class SystemClock(ClockPort):
    def __init__(self, timezone: str = "UTC") -> None:
        self._tz = _safe_timezone(timezone)

    def today(self) -> date:
        return datetime.now(self._tz).date()

    def now_ms(self) -> int:
        return int(time.time() * 1000)


def _safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except Exception:
        return ZoneInfo("UTC")
