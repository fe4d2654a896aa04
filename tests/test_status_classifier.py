from app.application.utils.status_classifier import STATUS_STYLES, UNKNOWN_STYLE, classify, tile_color
from app.domain.entities.booking import Booking, BookingStatus


def _booking(status: str, key: str = "k") -> Booking:
    return Booking(key=key, date="2024-05-01", type="Marriage", name="A", status=status)


def test_classify_covers_every_status():
    """Each status maps to one colour and one non-empty label."""
    expected = {
        "completedNotPaid": ("red", "Completed - PAYMENT PENDING"),
        "completedPaid": ("green", "Completed & Paid"),
        "prepaid": ("blue", "PAID (Booked)"),
        "call": ("yellow", "Call Confirmed (Not Paid)"),
    }
    for status, (color, label) in expected.items():
        style = classify(status)
        assert (style.color, style.label) == (color, label)

    pairs = {(s.color, s.label) for s in STATUS_STYLES.values()}
    assert len(pairs) == len(BookingStatus)


def test_classify_accepts_enum_members():
    assert classify(BookingStatus.PREPAID).color == "blue"


def test_unknown_status_is_gray():
    """Corrupted status values fall back to the gray category."""
    assert classify("cancelled") == UNKNOWN_STYLE
    assert classify("") == UNKNOWN_STYLE
    assert classify(None).color == "gray"


def test_css_classes():
    style = classify("completedNotPaid")
    assert style.tile_class == "red-tile"
    assert style.row_class == "row-red"


def test_tile_priority_red_beats_blue():
    bookings = [_booking("prepaid", "a"), _booking("completedNotPaid", "b")]
    assert tile_color(bookings) == "red"


def test_tile_call_and_prepaid_is_blue():
    bookings = [_booking("call", "a"), _booking("prepaid", "b")]
    assert tile_color(bookings) == "blue"


def test_tile_green_beats_yellow_and_unknown_is_last():
    assert tile_color([_booking("call"), _booking("completedPaid")]) == "green"
    assert tile_color([_booking("bogus"), _booking("call")]) == "yellow"
    assert tile_color([_booking("bogus")]) == "gray"


def test_tile_without_bookings_has_no_color():
    assert tile_color([]) is None
