"""
Tests for the HTML pages and the JSON API.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse

from app.application.exceptions import StoreUnavailableError


RECORD = {"id": 7, "date": "2024-05-01", "type": "Marriage", "name": "A", "status": "call", "paid": False}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_api_create_and_list(client):
    resp = client.post("/api/v1/bookings", json={"date": "2030-01-01", "type": "Marriage", "name": "A"})
    assert resp.status_code == 201
    assert resp.json()["paid"] is False
    assert resp.json()["status"] == "call"

    data = client.get("/api/v1/bookings", params={"date": "2030-01-01"}).json()
    (booking,) = data["bookings"]
    assert booking["key"] == "k1"
    assert booking["style"]["color"] == "yellow"
    assert booking["past"] is False
    assert booking["actions"] == ["toggle_paid", "delete"]

    assert client.get("/api/v1/bookings", params={"date": "2030-01-02"}).json()["bookings"] == []


def test_api_validation_error_is_400(client):
    resp = client.post("/api/v1/bookings", json={"date": "2030-01-01", "type": " ", "name": "A"})
    assert resp.status_code == 400
    assert "Event type" in resp.json()["detail"]


def test_api_scenario(client, store):
    client.post("/api/v1/bookings", json={"date": "2030-01-01", "type": "Marriage", "name": "A", "status": "call"})

    resp = client.post("/api/v1/bookings/k1/toggle-paid")
    assert resp.json() == {"key": "k1", "status": "prepaid"}
    assert store.records()["k1"]["paid"] is True

    resp = client.post("/api/v1/bookings/k1/complete")
    assert resp.status_code == 409
    assert store.records()["k1"]["status"] == "prepaid"

    assert client.delete("/api/v1/bookings/k1").status_code == 204
    assert client.delete("/api/v1/bookings/k1").status_code == 204
    assert client.get("/api/v1/bookings").json()["bookings"] == []


def test_api_complete_past_booking(client, store):
    store.create(dict(RECORD, status="prepaid", paid=True))

    (booking,) = client.get("/api/v1/bookings").json()["bookings"]
    assert booking["actions"] == ["toggle_paid", "complete", "delete"]

    resp = client.post("/api/v1/bookings/k1/complete")
    assert resp.json()["status"] == "completedPaid"
    assert client.post("/api/v1/bookings/k1/complete").status_code == 409


def test_api_unknown_key_is_404(client):
    assert client.post("/api/v1/bookings/nope/toggle-paid").status_code == 404


def test_api_calendar_month_tiles(client, store):
    store.create(dict(RECORD, status="prepaid"))
    store.create(dict(RECORD, status="completedNotPaid"))
    store.create(dict(RECORD, date="2024-05-02", status="call"))
    store.create(dict(RECORD, date="2024-06-01", status="call"))

    data = client.get("/api/v1/calendar/2024/5").json()
    assert data["tiles"] == {"2024-05-01": "red", "2024-05-02": "yellow"}
    assert client.get("/api/v1/calendar/2024/13").status_code == 400


def test_api_store_failure_is_502(client, store, monkeypatch):
    def fail(record):
        raise StoreUnavailableError("store unreachable")

    monkeypatch.setattr(store, "create", fail)
    resp = client.post("/api/v1/bookings", json={"date": "2030-01-01", "type": "Marriage", "name": "A"})
    assert resp.status_code == 502


def test_page_renders_calendar_and_table(client, store):
    store.create(dict(RECORD))
    store.create(dict(RECORD, name="B", status="completedNotPaid"))

    html = client.get("/", params={"date": "2024-05-01"}).text
    assert "SLN Gardens Booking System" in html
    assert "Bookings for 2024-05-01" in html
    assert "red-tile" in html
    assert "Mark as Paid" in html
    assert "Mark Complete" in html
    assert "Completed - PAYMENT PENDING" in html
    assert "Event Over" in html
    assert "Add New Booking for 2024-05-01" in html


def test_page_without_bookings_hides_table(client):
    html = client.get("/", params={"date": "2024-05-03"}).text
    assert "Bookings for" not in html
    assert "Add New Booking for 2024-05-03" in html


def test_page_defaults_to_clock_today(client):
    html = client.get("/").text
    assert "Add New Booking for 2024-05-10" in html


def test_page_future_booking_shows_upcoming(client, store):
    store.create(dict(RECORD, date="2030-01-01"))
    html = client.get("/", params={"date": "2030-01-01"}).text
    assert "Upcoming" in html
    assert "Mark Complete" not in html


def test_page_escapes_user_text(client, store):
    store.create(dict(RECORD, name="<script>x</script>"))
    html = client.get("/", params={"date": "2024-05-01"}).text
    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html


def test_form_add_redirects_back_to_day(client, store):
    resp = client.post(
        "/bookings",
        data={"date": "2024-05-20", "type": "Reception", "name": "C", "status": "prepaid"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    query = parse_qs(urlparse(resp.headers["location"]).query)
    assert query["date"] == ["2024-05-20"]
    assert store.records()["k1"]["paid"] is True


def test_form_add_rejection_is_shown(client, store):
    resp = client.post("/bookings", data={"date": "2024-05-20", "type": "", "name": "C"})
    assert resp.status_code == 200
    assert "Event type is required" in resp.text
    assert store.records() == {}


def test_form_actions_round_trip(client, store):
    store.create(dict(RECORD))

    client.post("/bookings/k1/toggle-paid")
    assert store.records()["k1"]["status"] == "prepaid"

    resp = client.post("/bookings/k1/complete", follow_redirects=False)
    assert parse_qs(urlparse(resp.headers["location"]).query)["date"] == ["2024-05-01"]
    assert store.records()["k1"]["status"] == "completedPaid"

    resp = client.post("/bookings/k1/complete")
    assert "cannot complete" in resp.text

    client.post("/bookings/k1/delete")
    assert store.records() == {}


def test_api_missing_fields_are_400(client):
    resp = client.post("/api/v1/bookings", json={"date": "2030-01-01"})
    assert resp.status_code == 400
    assert "Event type" in resp.json()["detail"]
    assert client.post("/api/v1/bookings", json={}).status_code == 400


def test_form_store_failure_shows_banner(client, store, monkeypatch):
    def fail(*args):
        raise StoreUnavailableError("store unreachable")

    monkeypatch.setattr(store, "create", fail)
    resp = client.post("/bookings", data={"date": "2024-05-20", "type": "Reception", "name": "C"})
    assert resp.status_code == 200
    assert "Booking not saved: store unreachable" in resp.text
    assert "Add New Booking for 2024-05-20" in resp.text


def test_form_action_store_failure_shows_banner(client, store, monkeypatch):
    store.create(dict(RECORD))

    def fail(*args):
        raise StoreUnavailableError("store unreachable")

    monkeypatch.setattr(store, "patch", fail)
    resp = client.post("/bookings/k1/toggle-paid")
    assert "Payment not updated: store unreachable" in resp.text
    assert store.records()["k1"]["status"] == "call"

    monkeypatch.setattr(store, "remove", fail)
    resp = client.post("/bookings/k1/delete")
    assert "Booking not deleted: store unreachable" in resp.text
    assert "k1" in store.records()


def test_form_invalid_date_redirects_to_clock_today(client):
    resp = client.post("/bookings", data={"date": "soon", "type": "Reception", "name": "C"}, follow_redirects=False)
    assert resp.status_code == 303
    assert parse_qs(urlparse(resp.headers["location"]).query)["date"] == ["2024-05-10"]
