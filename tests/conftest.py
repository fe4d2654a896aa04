from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.booking_board import BookingBoard
from app.application.use_cases.manage_bookings import BookingActionsUseCase
from app.infrastructure.store.memory_store import MemoryBookingStore
from app.wiring import dependencies

from tests.helpers import FixedClock, sequential_keys


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> MemoryBookingStore:
    return MemoryBookingStore(key_factory=sequential_keys())


@pytest.fixture
def board(store: MemoryBookingStore, clock: FixedClock):
    board = BookingBoard(store=store, clock=clock)
    board.start()
    yield board
    board.stop()


@pytest.fixture
def actions(store: MemoryBookingStore, board: BookingBoard, clock: FixedClock) -> BookingActionsUseCase:
    return BookingActionsUseCase(store=store, board=board, clock=clock)


@pytest.fixture
def client(store: MemoryBookingStore, clock: FixedClock):
    from app.main import app

    dependencies.configure(store=store, clock=clock)
    with TestClient(app) as test_client:
        yield test_client
    dependencies.configure()
