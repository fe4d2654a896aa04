import logging

from app.core.config import settings
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.clock import ClockPort
from app.application.use_cases.booking_board import BookingBoard
from app.application.use_cases.manage_bookings import BookingActionsUseCase
from app.infrastructure.clock.system_clock import SystemClock
from app.infrastructure.store.firebase_store import FirebaseBookingStore
from app.infrastructure.store.json_store import JsonBookingStore
from app.infrastructure.store.memory_store import MemoryBookingStore


_booking_store: BookingStorePort | None = None
_clock: ClockPort | None = None
_board: BookingBoard | None = None


def _store_provider() -> str:
    provider = settings.STORE_PROVIDER.strip().lower()
    if provider:
        return provider
    if settings.FIREBASE_DATABASE_URL:
        return "firebase"
    if settings.ENV.lower() in {"dev", "local"}:
        return "json"
    return "memory"


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        logger = logging.getLogger(__name__)
        provider = _store_provider()
        if provider == "firebase":
            _booking_store = FirebaseBookingStore()
        elif provider == "json":
            _booking_store = JsonBookingStore(file_path=settings.JSON_STORE_PATH)
        elif provider == "memory":
            _booking_store = MemoryBookingStore()
        else:
            raise ValueError(f"Unknown STORE_PROVIDER '{settings.STORE_PROVIDER}'")
        logger.info("Using booking store", extra={"provider": provider})
    return _booking_store


def get_clock() -> ClockPort:
    global _clock
    if _clock is None:
        _clock = SystemClock(settings.BUSINESS_TIMEZONE)
    return _clock


def get_booking_board() -> BookingBoard:
    global _board
    if _board is None:
        _board = BookingBoard(store=get_booking_store(), clock=get_clock())
    return _board


def get_booking_actions() -> BookingActionsUseCase:
    return BookingActionsUseCase(store=get_booking_store(), board=get_booking_board(), clock=get_clock())


def configure(store: BookingStorePort | None = None, clock: ClockPort | None = None) -> None:
    """Replace the process-wide store and clock. The board is rebuilt on next use."""
    global _booking_store, _clock, _board
    if _board is not None:
        _board.stop()
    _booking_store = store
    _clock = clock
    _board = None


def shutdown() -> None:
    global _board, _booking_store
    if _board is not None:
        _board.stop()
        _board = None
    if _booking_store is not None:
        _booking_store.close()
        _booking_store = None
