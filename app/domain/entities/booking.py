from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class BookingStatus(str, Enum):
    CALL = "call"
    PREPAID = "prepaid"
    COMPLETED_PAID = "completedPaid"
    COMPLETED_NOT_PAID = "completedNotPaid"


OPEN_STATUSES = frozenset({BookingStatus.CALL, BookingStatus.PREPAID})
COMPLETED_STATUSES = frozenset({BookingStatus.COMPLETED_PAID, BookingStatus.COMPLETED_NOT_PAID})


def parse_status(value: Any) -> BookingStatus | None:
    """Return the matching status, or None for anything outside the closed set."""
    try:
        return BookingStatus(value)
    except ValueError:
        return None


def paid_for_status(status: BookingStatus) -> bool:
    return status == BookingStatus.PREPAID


@dataclass(frozen=True)
class Booking:
    key: str
    date: str  # YYYY-MM-DD
    type: str
    name: str
    status: str  # raw value from the store, may be outside BookingStatus
    paid: bool = False
    id: int | None = None  # client timestamp in ms, display only

    @property
    def lifecycle(self) -> BookingStatus | None:
        return parse_status(self.status)

    @property
    def is_open(self) -> bool:
        return self.lifecycle in OPEN_STATUSES

    @property
    def is_completed(self) -> bool:
        return self.lifecycle in COMPLETED_STATUSES

    @classmethod
    def from_record(cls, key: str, record: dict[str, Any]) -> "Booking":
        raw_id = record.get("id")
        try:
            booking_id = int(raw_id) if raw_id is not None else None
        except (TypeError, ValueError):
            booking_id = None
        return cls(
            key=str(key),
            date=str(record.get("date") or ""),
            type=str(record.get("type") or ""),
            name=str(record.get("name") or ""),
            status=str(record.get("status") or ""),
            paid=record.get("paid") is True,
            id=booking_id,
        )


@dataclass(frozen=True)
class NewBooking:
    id: int
    date: str
    type: str
    name: str
    status: BookingStatus
    paid: bool

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "type": self.type,
            "name": self.name,
            "status": self.status.value,
            "paid": self.paid,
        }


def bookings_from_tree(tree: dict[str, Any] | None) -> list[Booking]:
    """Flatten a `{key: record}` tree into bookings, keeping tree order."""
    bookings: list[Booking] = []
    for key, record in (tree or {}).items():
        if not isinstance(record, dict):
            continue
        bookings.append(Booking.from_record(key, record))
    return bookings
