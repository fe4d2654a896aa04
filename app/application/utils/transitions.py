from __future__ import annotations

from enum import Enum

from app.domain.entities.booking import BookingStatus


class BookingAction(str, Enum):
    TOGGLE_PAID = "toggle_paid"
    COMPLETE = "complete"


# (current status, action) -> next status. Missing pairs are rejected.
# COMPLETE entries give the target for consistent records; the captured `paid`
# flag decides the final value in BookingActionsUseCase.complete.
TRANSITIONS: dict[tuple[BookingStatus, BookingAction], BookingStatus] = {
    (BookingStatus.CALL, BookingAction.TOGGLE_PAID): BookingStatus.PREPAID,
    (BookingStatus.PREPAID, BookingAction.TOGGLE_PAID): BookingStatus.CALL,
    (BookingStatus.CALL, BookingAction.COMPLETE): BookingStatus.COMPLETED_NOT_PAID,
    (BookingStatus.PREPAID, BookingAction.COMPLETE): BookingStatus.COMPLETED_PAID,
}


def next_status(current: BookingStatus | None, action: BookingAction) -> BookingStatus | None:
    if current is None:
        return None
    return TRANSITIONS.get((current, action))


def completion_status(paid: bool) -> BookingStatus:
    return BookingStatus.COMPLETED_PAID if paid else BookingStatus.COMPLETED_NOT_PAID
