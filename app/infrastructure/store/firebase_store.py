from __future__ import annotations

import logging
import threading
from typing import Any, Callable, TypeVar

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError

from app.application.exceptions import StoreUnavailableError
from app.application.ports.booking_store import BookingStorePort, BookingSubscription, SnapshotCallback
from app.core.config import settings
from app.domain.entities.booking import bookings_from_tree


T = TypeVar("T")

logger = logging.getLogger(__name__)


def init_firebase_app(database_url: str, credentials_path: str | None = None) -> firebase_admin.App:
    """Return the default Firebase app, initialising it with the database URL on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if credentials_path:
        cred = credentials.Certificate(credentials_path)
    else:
        cred = credentials.ApplicationDefault()
    options: dict[str, Any] = {"databaseURL": database_url}
    if settings.FIREBASE_PROJECT_ID:
        options["projectId"] = settings.FIREBASE_PROJECT_ID
    app = firebase_admin.initialize_app(cred, options)
    logger.info("Firebase app initialised", extra={"path": database_url})
    return app


class FirebaseBookingStore(BookingStorePort):
    """
    Firebase Realtime Database adapter on the Admin SDK.

    Writes:
    - create  -> reference.push(record)
    - patch   -> reference.child(key).update(fields)
    - remove  -> reference.child(key).delete()

    Each subscription is a reference listener. SDK errors surface as
    StoreUnavailableError.
    """

    def __init__(
        self,
        reference: db.Reference | None = None,
        database_url: str | None = None,
        credentials_path: str | None = None,
        path: str | None = None,
    ) -> None:
        if reference is None:
            url = database_url or settings.FIREBASE_DATABASE_URL
            if not url:
                raise ValueError("FIREBASE_DATABASE_URL is required for the Firebase booking store")
            app = init_firebase_app(url, credentials_path or settings.FIREBASE_CREDENTIALS_PATH)
            reference = db.reference(path or settings.BOOKINGS_PATH, app=app)
        self._ref = reference
        self._listeners: list[_BookingListener] = []
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def subscribe(self, on_change: SnapshotCallback | None = None) -> BookingSubscription:
        listener: _BookingListener

        def _close() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
            listener.close()

        subscription = BookingSubscription(on_change=on_change, on_cancel=_close)
        listener = _BookingListener(self._ref, subscription)
        listener.registration = self._call("listen", lambda: self._ref.listen(listener))
        with self._lock:
            self._listeners.append(listener)
        return subscription

    def create(self, record: dict[str, Any]) -> None:
        new_ref = self._call("push", lambda: self._ref.push(record))
        self._logger.info("Booking created", extra={"booking_key": new_ref.key, "date": record.get("date")})

    def patch(self, key: str, fields: dict[str, Any]) -> None:
        self._call("update", lambda: self._ref.child(key).update(fields))
        self._logger.info("Booking patched", extra={"booking_key": key, "fields": sorted(fields)})

    def remove(self, key: str) -> None:
        self._call("delete", lambda: self._ref.child(key).delete())
        self._logger.info("Booking removed", extra={"booking_key": key})

    def close(self) -> None:
        with self._lock:
            listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener.close()

    def _call(self, method: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except FirebaseError as e:
            self._logger.error("Booking store call failed", extra={"method": method, "error": str(e)})
            raise StoreUnavailableError(f"Booking store {method} failed: {e}") from e


class _BookingListener:
    """
    Callback for reference.listen(). A put on the root carries the whole
    collection; any other change re-reads it so subscribers always get the
    full list. `cancel` and `auth_revoked` end the stream.
    """

    def __init__(self, reference: db.Reference, subscription: BookingSubscription) -> None:
        self._ref = reference
        self._subscription = subscription
        self.registration: Any = None
        self.stopped = False
        self._closed = threading.Event()

    def __call__(self, event: db.Event) -> None:
        if self.stopped:
            return
        if event.event_type in ("cancel", "auth_revoked"):
            logger.error(
                "Booking stream ended by the server",
                extra={"event": event.event_type, "error": event.data},
            )
            self.stopped = True
            # close() joins the listener thread, which is the one running this callback
            threading.Thread(target=self.close, daemon=True).start()
            return
        if event.event_type not in ("put", "patch"):
            return

        if event.event_type == "put" and event.path == "/":
            tree = event.data
        else:
            try:
                tree = self._ref.get()
            except FirebaseError as e:
                logger.warning(
                    "Could not refresh bookings, keeping last snapshot",
                    extra={"event": event.event_type, "error": str(e)},
                )
                return
        self._subscription.deliver(bookings_from_tree(tree if isinstance(tree, dict) else {}))

    def close(self) -> None:
        self.stopped = True
        if self._closed.is_set() or self.registration is None:
            return
        self._closed.set()
        self.registration.close()
