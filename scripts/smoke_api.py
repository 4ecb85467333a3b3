#!/usr/bin/env python3
"""Smoke test against a running server: list availability, then book the first free slot."""

import json
import sys
from datetime import datetime, timedelta

import httpx


BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:3000"
TIMEZONE = "America/New_York"


def check_availability() -> dict | None:
    print("=" * 60)
    print("Testing POST /check-availability")
    print("=" * 60)

    now = datetime.now().replace(microsecond=0)
    payload = {
        "timezone": TIMEZONE,
        "startDate": now.isoformat(),
        "endDate": (now + timedelta(days=7)).isoformat(),
    }
    print(f"Request: {json.dumps(payload, indent=2)}")

    try:
        response = httpx.post(f"{BASE_URL}/check-availability", json=payload, timeout=60.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return None

    data = response.json()
    print(f"✅ {len(data['availableSlots'])} available slots")
    for slot in data["availableSlots"][:5]:
        print(f"  {slot['formatted']}  ({slot['dateTime']})")
    return data


def save_booking(selected: str) -> dict | None:
    print("\n" + "=" * 60)
    print("Testing POST /save-booking")
    print("=" * 60)

    payload = {"timezone": TIMEZONE, "selectedDateTime": selected}
    print(f"Request: {json.dumps(payload, indent=2)}")

    try:
        response = httpx.post(f"{BASE_URL}/save-booking", json=payload, timeout=30.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return None

    data = response.json()
    print(f"✅ Booked: {json.dumps(data['booking'], indent=2)}")
    return data


def main():
    availability = check_availability()
    if availability and availability["availableSlots"]:
        save_booking(availability["availableSlots"][0]["dateTime"])
    else:
        print("\nNo slots to book, skipping /save-booking")


if __name__ == "__main__":
    main()
