from __future__ import annotations

import calendar
from datetime import date
from html import escape
from urllib.parse import urlencode

from app.application.use_cases.booking_board import BookingBoard, BookingRow
from app.domain.entities.booking import BookingStatus
from app.application.utils.status_classifier import STATUS_STYLES

STYLESHEET = """
body { font-family: system-ui, sans-serif; margin: 0; background: #fafafa; }
.main-wrap { max-width: 960px; margin: 0 auto; padding: 16px; }
.page-title { font-size: 1.6rem; margin-bottom: 0; }
.ownername { color: #555; margin-top: 4px; }
.notice { padding: 8px 12px; border-radius: 6px; margin: 8px 0; }
.notice.error { background: #f8d7da; color: #842029; }
.notice.info { background: #d1e7dd; color: #0f5132; }
.calendar { border-collapse: collapse; width: 100%; max-width: 420px; }
.calendar th, .calendar td { text-align: center; padding: 6px; }
.calendar td a { display: block; padding: 6px; border-radius: 6px; color: inherit; text-decoration: none; }
.calendar td.outside a { color: #aaa; }
.calendar td.selected a { outline: 2px solid #333; }
.calendar td.today a { font-weight: bold; }
.calendar-nav { display: flex; justify-content: space-between; max-width: 420px; }
.red-tile { background: #f28b82; }
.green-tile { background: #81c995; }
.blue-tile { background: #8ab4f8; }
.yellow-tile { background: #fdd663; }
.gray-tile { background: #dadce0; }
.responsive-table { border-collapse: collapse; width: 100%; }
.responsive-table th, .responsive-table td { border: 1px solid #ddd; padding: 6px; }
.row-red { background: #fce8e6; }
.row-green { background: #e6f4ea; }
.row-blue { background: #e8f0fe; }
.row-yellow { background: #fef7e0; }
.row-gray { background: #f1f3f4; }
.responsive-form-row { display: flex; flex-wrap: wrap; gap: 8px; }
.upcoming { color: #0d6efd; font-weight: bold; }
.event-over { color: #198754; font-weight: bold; }
.muted { color: #666; }
form.inline { display: inline; }
"""


def day_url(day: date, **extra: str) -> str:
    query = {"date": day.isoformat()}
    query.update({k: v for k, v in extra.items() if v})
    return "/?" + urlencode(query)


def _shift_month(day: date, delta: int) -> date:
    month_index = day.year * 12 + (day.month - 1) + delta
    return date(month_index // 12, month_index % 12 + 1, 1)


def render_calendar(board: BookingBoard, selected: date) -> str:
    tiles = board.month_tiles(selected.year, selected.month)
    today = board.today()
    weeks = calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(selected.year, selected.month)

    header = "".join(f"<th>{name}</th>" for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"))
    rows = []
    for week in weeks:
        cells = []
        for day in week:
            classes = []
            if day.month != selected.month:
                classes.append("outside")
                color = board.tile_color(day.isoformat())
            else:
                color = tiles.get(day.isoformat())
            if color:
                classes.append(f"{color}-tile")
            if day == selected:
                classes.append("selected")
            if day == today:
                classes.append("today")
            cells.append(
                f'<td class="{" ".join(classes)}"><a href="{escape(day_url(day))}">{day.day}</a></td>'
            )
        rows.append("<tr>" + "".join(cells) + "</tr>")

    prev_month = _shift_month(selected, -1)
    next_month = _shift_month(selected, 1)
    return (
        '<div class="calendar-nav">'
        f'<a href="{escape(day_url(prev_month))}">&laquo; {prev_month.strftime("%B %Y")}</a>'
        f'<strong>{selected.strftime("%B %Y")}</strong>'
        f'<a href="{escape(day_url(next_month))}">{next_month.strftime("%B %Y")} &raquo;</a>'
        "</div>"
        f'<table class="calendar"><thead><tr>{header}</tr></thead><tbody>{"".join(rows)}</tbody></table>'
    )


def _action_form(action: str, key: str, label: str, css: str) -> str:
    return (
        f'<form class="inline" method="post" action="/bookings/{escape(key)}/{action}">'
        f'<button type="submit" class="{css}">{escape(label)}</button></form>'
    )


def render_row(row: BookingRow) -> str:
    b = row.booking

    if row.can_toggle_paid:
        payment = _action_form("toggle-paid", b.key, row.toggle_label, "primary-btn")
    elif b.is_completed:
        payment = '<span class="muted">Event Completed</span>'
    else:
        payment = ""

    if row.can_complete:
        completion = _action_form("complete", b.key, "Mark Complete", "success-btn")
    elif b.is_open:
        completion = '<span class="upcoming">📅 Upcoming</span>'
    elif b.is_completed:
        completion = '<span class="event-over">✓ Event Over</span>'
    else:
        completion = ""

    cells = [
        escape(str(b.id) if b.id is not None else ""),
        escape(b.type),
        escape(b.name),
        escape(f"{row.style.icon} {row.style.label}".strip()),
        payment,
        completion,
        _action_form("delete", b.key, "Delete", "danger-btn"),
    ]
    return f'<tr class="{row.style.row_class}">' + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"


def render_table(rows: list[BookingRow], date_str: str) -> str:
    if not rows:
        return ""
    header = "".join(
        f"<th>{h}</th>"
        for h in ("ID", "Event Type", "Customer Name", "Status", "Payment Action", "Complete Event", "Delete")
    )
    body = "".join(render_row(r) for r in rows)
    return (
        '<div class="responsive-table-container">'
        f"<h3>Bookings for {escape(date_str)}</h3>"
        f'<table class="responsive-table"><thead><tr>{header}</tr></thead><tbody>{body}</tbody></table>'
        "</div>"
    )


def render_add_form(date_str: str) -> str:
    call = STATUS_STYLES[BookingStatus.CALL]
    prepaid = STATUS_STYLES[BookingStatus.PREPAID]
    return (
        '<div class="add-booking">'
        f"<h3>Add New Booking for {escape(date_str)}</h3>"
        '<form method="post" action="/bookings"><div class="responsive-form-row">'
        f'<input type="hidden" name="date" value="{escape(date_str)}">'
        '<input name="type" placeholder="Marriage, Reception, Other" required>'
        '<input name="name" placeholder="Customer Name" required>'
        '<select name="status">'
        f'<option value="call">{call.icon} {escape(call.label)}</option>'
        f'<option value="prepaid">{prepaid.icon} Prepaid</option>'
        "</select>"
        '<button type="submit" class="success-btn">Add Booking</button>'
        "</div></form></div>"
    )


def render_page(
    board: BookingBoard,
    selected: date,
    business_name: str,
    owner_name: str,
    notice: str | None = None,
    error: str | None = None,
) -> str:
    date_str = selected.isoformat()
    banners = ""
    if error:
        banners += f'<div class="notice error">{escape(error)}</div>'
    if notice:
        banners += f'<div class="notice info">{escape(notice)}</div>'

    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        f"<title>{escape(business_name)} Booking System</title>"
        f"<style>{STYLESHEET}</style></head><body>"
        '<div class="main-wrap">'
        f'<h1 class="page-title">🏛️ {escape(business_name)} Booking System</h1>'
        f'<p class="ownername">Owner: {escape(owner_name)}</p>'
        f"{banners}"
        f"{render_calendar(board, selected)}"
        f'<p class="selected-date"><b>Selected Date:</b> {selected.strftime("%a %b %d %Y")}</p>'
        f"{render_table(board.rows_on(date_str), date_str)}"
        f"{render_add_form(date_str)}"
        "</div></body></html>"
    )
