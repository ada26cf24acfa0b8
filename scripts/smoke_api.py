#!/usr/bin/env python3
"""Smoke test for a running booking API: walks one booking end to end."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"


def run_booking() -> bool:
    print("=" * 60)
    print("Walking the booking flow")
    print("=" * 60)

    try:
        branches = httpx.get(f"{BASE_URL}/api/v1/branches", timeout=10.0).json()
        branch_id = branches[0]["id"]
        services = httpx.get(f"{BASE_URL}/api/v1/branches/{branch_id}/services", timeout=10.0).json()
        service_id = services[0]["id"]
        stylists = httpx.get(
            f"{BASE_URL}/api/v1/branches/{branch_id}/stylists",
            params={"service_id": service_id},
            timeout=10.0,
        ).json()

        response = httpx.post(f"{BASE_URL}/api/v1/bookings", timeout=10.0)
        response.raise_for_status()
        session_id = response.json()["session_id"]
        base = f"{BASE_URL}/api/v1/bookings/{session_id}"
        print(f"Session: {session_id}")

        steps = [
            ("branch", {"branch_id": branch_id}),
            ("datetime", {"date": "2030-03-10", "time": "14:00"}),
            ("services/toggle", {"service_id": service_id}),
        ]
        if stylists:
            steps.append(("stylists", {"service_id": service_id, "stylist_id": stylists[0]["id"]}))
        steps.append(("confirm", None))

        for path, payload in steps:
            response = httpx.post(f"{base}/{path}", json=payload, timeout=10.0)
            response.raise_for_status()
            state = response.json()
            print(f"  {path}: step={state['current_step']} totals={state['totals']}")

        response = httpx.post(f"{base}/commit", timeout=30.0)
        response.raise_for_status()
        print(f"Booked: {response.json()['appointment_id']}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"Error: {e}")
        return False


def main():
    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
    except httpx.HTTPError:
        print("Server is not running!")
        print("   Please start it with: uvicorn salon_booking.main:app --reload --port 8001")
        sys.exit(1)

    sys.exit(0 if run_booking() else 1)


if __name__ == "__main__":
    main()
