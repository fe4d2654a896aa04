from __future__ import annotations

import logging

from app.application.exceptions import BookingNotFoundError, BookingValidationError, InvalidTransitionError
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.clock import ClockPort
from app.application.use_cases.booking_board import BookingBoard
from app.application.utils.date_index import is_past, parse_iso_date
from app.application.utils.transitions import BookingAction, completion_status, next_status
from app.domain.entities.booking import (
    OPEN_STATUSES,
    Booking,
    BookingStatus,
    NewBooking,
    paid_for_status,
    parse_status,
)


class BookingActionsUseCase:
    """
    Add, toggle-paid, complete and delete.

    Transitions are checked against the board's current snapshot before any
    write; a rejected action issues no store call. Store failures propagate
    as StoreUnavailableError and leave the board untouched.
    """

    def __init__(self, store: BookingStorePort, board: BookingBoard, clock: ClockPort) -> None:
        self._store = store
        self._board = board
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def add(self, date_str: str, type_: str, name: str, status: str = BookingStatus.CALL.value) -> NewBooking:
        type_ = (type_ or "").strip()
        name = (name or "").strip()
        if parse_iso_date(date_str) is None:
            raise BookingValidationError(f"Invalid date '{date_str}', expected YYYY-MM-DD")
        if not type_:
            raise BookingValidationError("Event type is required")
        if not name:
            raise BookingValidationError("Customer name is required")
        parsed = parse_status(status)
        if parsed not in OPEN_STATUSES:
            raise BookingValidationError(f"New bookings must be 'call' or 'prepaid', got '{status}'")

        booking = NewBooking(
            id=self._clock.now_ms(),
            date=date_str,
            type=type_,
            name=name,
            status=parsed,
            paid=paid_for_status(parsed),
        )
        self._store.create(booking.to_record())
        self._logger.info(
            "Booking added",
            extra={"date": date_str, "status": parsed.value, "booking_id": booking.id},
        )
        return booking

    def toggle_paid(self, key: str) -> BookingStatus:
        booking = self._require(key)
        target = next_status(booking.lifecycle, BookingAction.TOGGLE_PAID)
        if target is None:
            raise self._reject(booking, BookingAction.TOGGLE_PAID)

        self._store.patch(key, {"status": target.value, "paid": paid_for_status(target)})
        self._logger.info(
            "Booking payment toggled",
            extra={"booking_key": key, "status": target.value, "action": BookingAction.TOGGLE_PAID.value},
        )
        return target

    def complete(self, key: str) -> BookingStatus:
        booking = self._require(key)
        target = next_status(booking.lifecycle, BookingAction.COMPLETE)
        if target is None:
            raise self._reject(booking, BookingAction.COMPLETE)
        if not is_past(booking.date, self._clock):
            raise self._reject(
                booking,
                BookingAction.COMPLETE,
                reason=f"booking on {booking.date} has not happened yet",
            )

        paid = booking.paid
        final = completion_status(paid)
        if final != target:
            self._logger.warning(
                "Paid flag disagrees with status, completing by paid flag",
                extra={"booking_key": key, "status": booking.status, "paid": paid},
            )

        self._store.patch(key, {"status": final.value, "paid": paid})
        self._logger.info(
            "Booking completed",
            extra={"booking_key": key, "status": final.value, "action": BookingAction.COMPLETE.value},
        )
        return final

    def delete(self, key: str) -> None:
        self._store.remove(key)
        self._logger.info("Booking deleted", extra={"booking_key": key})

    def _require(self, key: str) -> Booking:
        booking = self._board.find(key)
        if booking is None:
            raise BookingNotFoundError(f"No booking with key '{key}'")
        return booking

    def _reject(self, booking: Booking, action: BookingAction, reason: str | None = None) -> InvalidTransitionError:
        error = InvalidTransitionError(booking.key, booking.status, action.value, reason)
        self._logger.warning(
            "Booking transition rejected",
            extra={"booking_key": booking.key, "status": booking.status, "action": action.value, "reason": error.reason},
        )
        return error
