from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator

from app.domain.entities.booking import Booking

SnapshotCallback = Callable[[list[Booking]], None]


class BookingSubscription:
    """
    Cancellable handle on a live booking list.

    The store calls `deliver` with the full list on every change. Consumers
    either pass a callback, read `snapshot`, or iterate `snapshots()`.
    Only the latest list matters, so a slow iterator skips intermediate ones.
    """

    def __init__(
        self,
        on_change: SnapshotCallback | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._on_change = on_change
        self._on_cancel = on_cancel
        self._changed = threading.Condition()
        self._snapshot: tuple[Booking, ...] | None = None
        self._version = 0
        self._cancelled = False
        self._logger = logging.getLogger(__name__)

    @property
    def active(self) -> bool:
        return not self._cancelled

    @property
    def snapshot(self) -> list[Booking] | None:
        """Latest delivered list, or None before the first delivery."""
        with self._changed:
            return list(self._snapshot) if self._snapshot is not None else None

    def deliver(self, bookings: list[Booking]) -> None:
        snapshot = tuple(bookings)
        with self._changed:
            if self._cancelled:
                return
            self._snapshot = snapshot
            self._version += 1
            self._changed.notify_all()

        if self._on_change is None:
            return
        try:
            self._on_change(list(snapshot))
        except Exception:
            self._logger.exception("Snapshot callback failed", extra={"count": len(snapshot)})

    def snapshots(self, timeout: float | None = None) -> Iterator[list[Booking]]:
        """Yield each new snapshot until cancelled, or until `timeout` passes without one."""
        seen = 0
        while True:
            with self._changed:
                if not self._cancelled and self._version == seen:
                    self._changed.wait(timeout)
                if self._cancelled or self._version == seen:
                    return
                seen = self._version
                snapshot = list(self._snapshot or ())
            yield snapshot

    def cancel(self) -> None:
        with self._changed:
            if self._cancelled:
                return
            self._cancelled = True
            self._changed.notify_all()
        if self._on_cancel is not None:
            self._on_cancel()

    def __enter__(self) -> "BookingSubscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


class BookingStorePort(ABC):
    @abstractmethod
    def subscribe(self, on_change: SnapshotCallback | None = None) -> BookingSubscription:
        """Deliver the current list immediately, then again on every change."""
        raise NotImplementedError

    @abstractmethod
    def create(self, record: dict[str, Any]) -> None:
        """Push a new booking. The store-assigned key arrives with the next snapshot."""
        raise NotImplementedError

    @abstractmethod
    def patch(self, key: str, fields: dict[str, Any]) -> None:
        """Shallow-merge `fields` into the record stored under `key`."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the record. Removing an absent key is not an error."""
        raise NotImplementedError

    def close(self) -> None:
        """Release connections held by the adapter."""
