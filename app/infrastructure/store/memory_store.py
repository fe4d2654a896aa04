from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from app.application.ports.booking_store import BookingStorePort, BookingSubscription, SnapshotCallback
from app.domain.entities.booking import Booking, bookings_from_tree
from app.infrastructure.store.push_ids import PushIdGenerator


class MemoryBookingStore(BookingStorePort):
    """In-process store. Every change is delivered synchronously to all subscribers."""

    def __init__(
        self,
        records: dict[str, dict[str, Any]] | None = None,
        key_factory: Callable[[], str] | None = None,
    ) -> None:
        self._records: dict[str, dict[str, Any]] = {k: dict(v) for k, v in (records or {}).items()}
        self._subscriptions: list[BookingSubscription] = []
        self._new_key = key_factory or PushIdGenerator()
        self._lock = threading.RLock()
        self._logger = logging.getLogger(__name__)

    def subscribe(self, on_change: SnapshotCallback | None = None) -> BookingSubscription:
        subscription: BookingSubscription

        def _release() -> None:
            with self._lock:
                if subscription in self._subscriptions:
                    self._subscriptions.remove(subscription)

        subscription = BookingSubscription(on_change=on_change, on_cancel=_release)
        with self._lock:
            self._subscriptions.append(subscription)
            subscription.deliver(self._snapshot())
        return subscription

    def create(self, record: dict[str, Any]) -> None:
        key = self._new_key()
        with self._lock:
            records = dict(self._records)
            records[key] = dict(record)
            self._commit(records)
            self._logger.info("Booking created", extra={"booking_key": key, "date": record.get("date")})

    def patch(self, key: str, fields: dict[str, Any]) -> None:
        with self._lock:
            record = self._records.get(key)
            if record is None:
                self._logger.warning("Patch on missing booking ignored", extra={"booking_key": key})
                return
            records = dict(self._records)
            records[key] = {**record, **fields}
            self._commit(records)
            self._logger.info("Booking patched", extra={"booking_key": key, "fields": sorted(fields)})

    def remove(self, key: str) -> None:
        with self._lock:
            if key not in self._records:
                return
            records = dict(self._records)
            del records[key]
            self._commit(records)
            self._logger.info("Booking removed", extra={"booking_key": key})

    def records(self) -> dict[str, dict[str, Any]]:
        with self._lock:
            return {k: dict(v) for k, v in self._records.items()}

    def _snapshot(self) -> list[Booking]:
        return bookings_from_tree(self._records)

    def _commit(self, records: dict[str, dict[str, Any]]) -> None:
        # persist first: a failed write leaves both the tree and subscribers untouched
        self._persist(records)
        self._records = records
        snapshot = self._snapshot()
        for subscription in list(self._subscriptions):
            subscription.deliver(snapshot)

    def _persist(self, records: dict[str, dict[str, Any]]) -> None:
        pass
