from pydantic import BaseModel, Field

from app.application.use_cases.booking_board import BookingRow


class CreateBookingSchema(BaseModel):
    date: str = ""
    type: str = ""
    name: str = ""
    status: str = "call"


class CreatedBookingSchema(BaseModel):
    id: int
    date: str
    type: str
    name: str
    status: str
    paid: bool


class StatusStyleSchema(BaseModel):
    color: str
    label: str
    icon: str = ""


class BookingSchema(BaseModel):
    key: str
    id: int | None = None
    date: str
    type: str
    name: str
    status: str
    paid: bool
    style: StatusStyleSchema
    past: bool
    actions: list[str] = Field(default_factory=list)

    @classmethod
    def from_row(cls, row: BookingRow) -> "BookingSchema":
        b = row.booking
        actions = []
        if row.can_toggle_paid:
            actions.append("toggle_paid")
        if row.can_complete:
            actions.append("complete")
        actions.append("delete")
        return cls(
            key=b.key,
            id=b.id,
            date=b.date,
            type=b.type,
            name=b.name,
            status=b.status,
            paid=b.paid,
            style=StatusStyleSchema(color=row.style.color, label=row.style.label, icon=row.style.icon),
            past=row.past,
            actions=actions,
        )


class BookingListSchema(BaseModel):
    date: str | None = None
    bookings: list[BookingSchema]


class TransitionResultSchema(BaseModel):
    key: str
    status: str


class CalendarMonthSchema(BaseModel):
    year: int
    month: int
    tiles: dict[str, str] = Field(default_factory=dict)
