from __future__ import annotations

from typing import Iterable

from app.domain.entities.booking import Booking, BookingStatus, parse_status
from app.domain.entities.status_style import StatusStyle

STATUS_STYLES: dict[BookingStatus, StatusStyle] = {
    BookingStatus.COMPLETED_NOT_PAID: StatusStyle("red", "Completed - PAYMENT PENDING", "❤️"),
    BookingStatus.COMPLETED_PAID: StatusStyle("green", "Completed & Paid", "💚"),
    BookingStatus.PREPAID: StatusStyle("blue", "PAID (Booked)", "💙"),
    BookingStatus.CALL: StatusStyle("yellow", "Call Confirmed (Not Paid)", "💛"),
}

UNKNOWN_STYLE = StatusStyle("gray", "Unknown status", "❔")

# Most urgent first: an unpaid completed event outranks everything on the tile.
TILE_PRIORITY = ("red", "green", "blue", "yellow", "gray")


def classify(status: str | BookingStatus | None) -> StatusStyle:
    """Map a status to its colour and label. Values outside the closed set are gray."""
    parsed = parse_status(status)
    if parsed is None:
        return UNKNOWN_STYLE
    return STATUS_STYLES[parsed]


def tile_color(bookings: Iterable[Booking]) -> str | None:
    """Highest-priority colour among the given bookings, None when there are none."""
    present = {classify(b.status).color for b in bookings}
    for color in TILE_PRIORITY:
        if color in present:
            return color
    return None
