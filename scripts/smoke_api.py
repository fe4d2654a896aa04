#!/usr/bin/env python3
"""Smoke test for the booking API against a running server."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8000"


def create_booking() -> str | None:
    print("=" * 60)
    print("Testing POST /api/v1/bookings")
    print("=" * 60)

    payload = {"date": "2030-01-01", "type": "Marriage", "name": "Smoke Test", "status": "call"}
    try:
        response = httpx.post(f"{BASE_URL}/api/v1/bookings", json=payload, timeout=10.0)
        response.raise_for_status()
        print(f"✅ Created: {response.json()}")
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None

    listing = httpx.get(f"{BASE_URL}/api/v1/bookings", params={"date": "2030-01-01"}, timeout=10.0).json()
    for booking in listing["bookings"]:
        if booking["name"] == "Smoke Test":
            print(f"✅ Listed with key {booking['key']} ({booking['style']['label']})")
            return booking["key"]
    print("⚠️  Created booking not visible yet (store snapshot still pending)")
    return None


def exercise_actions(key: str) -> None:
    print("\n" + "=" * 60)
    print(f"Testing actions on {key}")
    print("=" * 60)

    resp = httpx.post(f"{BASE_URL}/api/v1/bookings/{key}/toggle-paid", timeout=10.0)
    print(f"toggle-paid -> {resp.status_code} {resp.json()}")

    resp = httpx.post(f"{BASE_URL}/api/v1/bookings/{key}/complete", timeout=10.0)
    print(f"complete (future date, expect 409) -> {resp.status_code} {resp.json()}")

    resp = httpx.delete(f"{BASE_URL}/api/v1/bookings/{key}", timeout=10.0)
    print(f"delete -> {resp.status_code}")


def main():
    print("\n🚀 Testing Booking API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except Exception:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn app.main:app --reload")
        sys.exit(1)

    key = create_booking()
    if key:
        exercise_actions(key)

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
