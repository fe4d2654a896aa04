from __future__ import annotations

import calendar
import logging
import threading
from dataclasses import dataclass
from datetime import date

from app.application.ports.booking_store import BookingStorePort, BookingSubscription
from app.application.ports.clock import ClockPort
from app.application.utils.date_index import bookings_on_date, is_past
from app.application.utils.status_classifier import classify, tile_color
from app.application.utils.transitions import BookingAction, next_status
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.status_style import StatusStyle


@dataclass(frozen=True)
class BookingRow:
    booking: Booking
    style: StatusStyle
    past: bool
    can_toggle_paid: bool
    can_complete: bool

    @property
    def toggle_label(self) -> str:
        return "Mark as Paid" if self.booking.lifecycle == BookingStatus.CALL else "Mark as Not Paid"


class BookingBoard:
    """
    Local view of the booking list, kept current by a single store subscription.

    The list is replaced wholesale on each snapshot; readers get copies.
    Everything date-relative is recomputed per call from the injected clock.
    """

    def __init__(self, store: BookingStorePort, clock: ClockPort) -> None:
        self._store = store
        self._clock = clock
        self._bookings: tuple[Booking, ...] = ()
        self._lock = threading.Lock()
        self._subscription: BookingSubscription | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def started(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def start(self) -> None:
        if self.started:
            return
        self._subscription = self._store.subscribe(self._on_snapshot)
        self._logger.info("Booking board subscribed")

    def stop(self) -> None:
        if self._subscription is None:
            return
        self._subscription.cancel()
        self._subscription = None
        self._logger.info("Booking board unsubscribed")

    def _on_snapshot(self, bookings: list[Booking]) -> None:
        with self._lock:
            self._bookings = tuple(bookings)
        self._logger.debug("Booking snapshot received", extra={"count": len(bookings)})

    @property
    def bookings(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings)

    def find(self, key: str) -> Booking | None:
        for booking in self.bookings:
            if booking.key == key:
                return booking
        return None

    def bookings_on(self, date_str: str) -> list[Booking]:
        return bookings_on_date(self.bookings, date_str)

    def tile_color(self, date_str: str) -> str | None:
        return tile_color(self.bookings_on(date_str))

    def month_tiles(self, year: int, month: int) -> dict[str, str]:
        """Tile colour per ISO day of the month, days without bookings omitted."""
        bookings = self.bookings
        tiles: dict[str, str] = {}
        for day in range(1, calendar.monthrange(year, month)[1] + 1):
            date_str = date(year, month, day).isoformat()
            color = tile_color(bookings_on_date(bookings, date_str))
            if color:
                tiles[date_str] = color
        return tiles

    def is_past(self, date_str: str) -> bool:
        return is_past(date_str, self._clock)

    def today(self) -> date:
        return self._clock.today()

    def row(self, booking: Booking) -> BookingRow:
        past = self.is_past(booking.date)
        return BookingRow(
            booking=booking,
            style=classify(booking.status),
            past=past,
            can_toggle_paid=next_status(booking.lifecycle, BookingAction.TOGGLE_PAID) is not None,
            can_complete=past and next_status(booking.lifecycle, BookingAction.COMPLETE) is not None,
        )

    def rows_on(self, date_str: str) -> list[BookingRow]:
        return [self.row(b) for b in self.bookings_on(date_str)]
