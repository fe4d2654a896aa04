from __future__ import annotations

from datetime import date
from typing import Iterable

from app.application.ports.clock import ClockPort
from app.domain.entities.booking import Booking


def bookings_on_date(bookings: Iterable[Booking], date_str: str) -> list[Booking]:
    """Bookings whose date equals `date_str`, in input order."""
    return [b for b in bookings if b.date == date_str]


def parse_iso_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def is_past(date_str: str, clock: ClockPort) -> bool:
    """True when the date lies strictly before the clock's today.

    Must be called on every render; the answer changes at midnight.
    """
    parsed = parse_iso_date(date_str)
    if parsed is None:
        return False
    return parsed < clock.today()
