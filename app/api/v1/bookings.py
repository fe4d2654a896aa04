from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.v1.schemas import (
    BookingListSchema, BookingSchema, CalendarMonthSchema,
    CreateBookingSchema, CreatedBookingSchema, TransitionResultSchema,
)
from app.wiring.dependencies import get_booking_actions, get_booking_board
from app.application.use_cases.booking_board import BookingBoard
from app.application.use_cases.manage_bookings import BookingActionsUseCase
from app.application.exceptions import (
    BookingNotFoundError, BookingValidationError, InvalidTransitionError, StoreUnavailableError,
)

router = APIRouter()


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, BookingValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, BookingNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InvalidTransitionError):
        return HTTPException(status_code=409, detail=e.reason)
    return HTTPException(status_code=502, detail=str(e))


@router.get("/bookings", response_model=BookingListSchema)
def list_bookings(
    date: str | None = None,
    board: BookingBoard = Depends(get_booking_board),
):
    rows = board.rows_on(date) if date else [board.row(b) for b in board.bookings]
    return BookingListSchema(date=date, bookings=[BookingSchema.from_row(r) for r in rows])


@router.get("/calendar/{year}/{month}", response_model=CalendarMonthSchema)
def calendar_month(
    year: int,
    month: int,
    board: BookingBoard = Depends(get_booking_board),
):
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise HTTPException(status_code=400, detail="Invalid year or month")
    return CalendarMonthSchema(year=year, month=month, tiles=board.month_tiles(year, month))


@router.post("/bookings", response_model=CreatedBookingSchema, status_code=201)
def create_booking(
    req: CreateBookingSchema,
    uc: BookingActionsUseCase = Depends(get_booking_actions),
):
    try:
        booking = uc.add(req.date, req.type, req.name, req.status)
    except (BookingValidationError, StoreUnavailableError) as e:
        raise _http_error(e)

    return CreatedBookingSchema(
        id=booking.id,
        date=booking.date,
        type=booking.type,
        name=booking.name,
        status=booking.status.value,
        paid=booking.paid,
    )


@router.post("/bookings/{key}/toggle-paid", response_model=TransitionResultSchema)
def toggle_paid(
    key: str,
    uc: BookingActionsUseCase = Depends(get_booking_actions),
):
    try:
        status = uc.toggle_paid(key)
    except (BookingNotFoundError, InvalidTransitionError, StoreUnavailableError) as e:
        raise _http_error(e)
    return TransitionResultSchema(key=key, status=status.value)


@router.post("/bookings/{key}/complete", response_model=TransitionResultSchema)
def complete(
    key: str,
    uc: BookingActionsUseCase = Depends(get_booking_actions),
):
    try:
        status = uc.complete(key)
    except (BookingNotFoundError, InvalidTransitionError, StoreUnavailableError) as e:
        raise _http_error(e)
    return TransitionResultSchema(key=key, status=status.value)


@router.delete("/bookings/{key}", status_code=204)
def delete_booking(
    key: str,
    uc: BookingActionsUseCase = Depends(get_booking_actions),
):
    try:
        uc.delete(key)
    except StoreUnavailableError as e:
        raise _http_error(e)
    return Response(status_code=204)
