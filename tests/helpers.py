from __future__ import annotations

import itertools
from datetime import date

from app.application.ports.clock import ClockPort


TODAY = date(2024, 5, 10)


class FixedClock(ClockPort):
    def __init__(self, today: date = TODAY) -> None:
        self.current = today
        self._ms = itertools.count(1715300000000)

    def today(self) -> date:
        return self.current

    def now_ms(self) -> int:
        return next(self._ms)


def sequential_keys(prefix: str = "k"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"
