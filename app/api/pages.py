from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from app.application.exceptions import (
    BookingNotFoundError,
    BookingValidationError,
    InvalidTransitionError,
    StoreUnavailableError,
)
from app.application.use_cases.booking_board import BookingBoard
from app.application.use_cases.manage_bookings import BookingActionsUseCase
from app.application.utils.date_index import parse_iso_date
from app.core.config import settings
from app.presentation.calendar_page import day_url, render_page
from app.wiring.dependencies import get_booking_actions, get_booking_board


router = APIRouter()


def _back(
    board: BookingBoard, day_str: str, notice: str | None = None, error: str | None = None
) -> RedirectResponse:
    day = parse_iso_date(day_str) or board.today()
    return RedirectResponse(day_url(day, notice=notice or "", error=error or ""), status_code=303)


def _day_of(board: BookingBoard, key: str) -> str:
    booking = board.find(key)
    return booking.date if booking else board.today().isoformat()


@router.get("/", response_class=HTMLResponse)
def calendar_view(
    date_str: str | None = Query(None, alias="date"),
    notice: str | None = None,
    error: str | None = None,
    board: BookingBoard = Depends(get_booking_board),
) -> HTMLResponse:
    selected = parse_iso_date(date_str) if date_str else None
    if date_str and selected is None:
        error = error or f"Invalid date '{date_str}', showing today"
    html = render_page(
        board,
        selected or board.today(),
        business_name=settings.BUSINESS_NAME,
        owner_name=settings.OWNER_NAME,
        notice=notice,
        error=error,
    )
    return HTMLResponse(html)


@router.post("/bookings")
def add_booking(
    date_str: str = Form(..., alias="date"),
    type_: str = Form("", alias="type"),
    name: str = Form(""),
    status: str = Form("call"),
    board: BookingBoard = Depends(get_booking_board),
    uc: BookingActionsUseCase = Depends(get_booking_actions),
) -> RedirectResponse:
    try:
        uc.add(date_str, type_, name, status)
    except BookingValidationError as e:
        return _back(board, date_str, error=str(e))
    except StoreUnavailableError as e:
        return _back(board, date_str, error=f"Booking not saved: {e}")
    return _back(board, date_str, notice="Booking added")


@router.post("/bookings/{key}/toggle-paid")
def toggle_paid(
    key: str,
    board: BookingBoard = Depends(get_booking_board),
    uc: BookingActionsUseCase = Depends(get_booking_actions),
) -> RedirectResponse:
    day_str = _day_of(board, key)
    try:
        uc.toggle_paid(key)
    except (BookingNotFoundError, InvalidTransitionError) as e:
        return _back(board, day_str, error=str(e))
    except StoreUnavailableError as e:
        return _back(board, day_str, error=f"Payment not updated: {e}")
    return _back(board, day_str)


@router.post("/bookings/{key}/complete")
def complete(
    key: str,
    board: BookingBoard = Depends(get_booking_board),
    uc: BookingActionsUseCase = Depends(get_booking_actions),
) -> RedirectResponse:
    day_str = _day_of(board, key)
    try:
        uc.complete(key)
    except (BookingNotFoundError, InvalidTransitionError) as e:
        return _back(board, day_str, error=str(e))
    except StoreUnavailableError as e:
        return _back(board, day_str, error=f"Booking not completed: {e}")
    return _back(board, day_str)


@router.post("/bookings/{key}/delete")
def delete(
    key: str,
    board: BookingBoard = Depends(get_booking_board),
    uc: BookingActionsUseCase = Depends(get_booking_actions),
) -> RedirectResponse:
    day_str = _day_of(board, key)
    try:
        uc.delete(key)
    except StoreUnavailableError as e:
        return _back(board, day_str, error=f"Booking not deleted: {e}")
    return _back(board, day_str, notice="Booking deleted")
