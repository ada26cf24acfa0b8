"""
Tests for the booking and catalog HTTP endpoints.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from salon_booking.application.exceptions import SubmissionError
from salon_booking.application.ports.appointment_sink import AppointmentSinkPort
from salon_booking.application.use_cases.booking_session import BookingSessionUseCase
from salon_booking.application.use_cases.catalog import CatalogUseCase
from salon_booking.infrastructure.appointments.mock_sink import MockAppointmentSink
from salon_booking.infrastructure.catalog.json_catalog import JsonCatalog
from salon_booking.infrastructure.store.memory_store import MemoryBookingSessionStore
from salon_booking.main import app
from salon_booking.wiring.dependencies import get_booking_session_use_case, get_catalog_use_case


class FailingSink(AppointmentSinkPort):
    async def create_appointment(self, payload):
        raise SubmissionError("Backend rejected the appointment (503)")


def _make_client(sink: AppointmentSinkPort) -> TestClient:
    catalog = CatalogUseCase(catalog=JsonCatalog())
    use_case = BookingSessionUseCase(
        store=MemoryBookingSessionStore(),
        catalog=catalog,
        sink=sink,
    )
    app.dependency_overrides[get_catalog_use_case] = lambda: catalog
    app.dependency_overrides[get_booking_session_use_case] = lambda: use_case
    return TestClient(app)


@pytest.fixture
def sink():
    return MockAppointmentSink()


@pytest.fixture
def client(sink):
    yield _make_client(sink)
    app.dependency_overrides.clear()


def _start(client: TestClient) -> str:
    response = client.post("/api/v1/bookings")
    assert response.status_code == 201
    return response.json()["session_id"]


def _ready_session(client: TestClient) -> str:
    session_id = _start(client)
    base = f"/api/v1/bookings/{session_id}"
    assert client.post(f"{base}/branch", json={"branch_id": "b1"}).status_code == 200
    assert client.post(f"{base}/datetime", json={"date": "2025-03-10", "time": "14:00"}).status_code == 200
    assert client.post(f"{base}/services/toggle", json={"service_id": "s1"}).status_code == 200
    assert client.post(f"{base}/stylists", json={"service_id": "s1", "stylist_id": "st1"}).status_code == 200
    assert client.post(f"{base}/confirm").status_code == 200
    return session_id


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_catalog_endpoints(client):
    branches = client.get("/api/v1/branches").json()
    assert [b["id"] for b in branches] == ["b1", "b2"]

    services = client.get("/api/v1/branches/b1/services").json()
    assert [s["id"] for s in services] == ["s1", "s2", "s3"]

    stylists = client.get("/api/v1/branches/b1/stylists", params={"service_id": "s2"}).json()
    assert [s["id"] for s in stylists] == ["st1"]

    assert client.get("/api/v1/branches/b3/services").status_code == 404


def test_full_booking_flow(client, sink):
    session_id = _ready_session(client)
    base = f"/api/v1/bookings/{session_id}"

    state = client.get(base).json()
    assert state["current_step"] == 4
    assert state["totals"] == {"total_price": 500, "total_duration": 30}
    assert state["stylist_assignments"]["s1"]["id"] == "st1"
    assert state["missing"] == []

    response = client.post(
        f"{base}/commit",
        json={"client": {"id": "c1", "first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["appointment_id"] == "mock_appointment_1"
    assert body["booking"]["current_step"] == 1
    assert body["booking"]["services"] == []

    document = sink.appointments["mock_appointment_1"]
    assert document["clientName"] == "Ada Lovelace"
    assert document["serviceStylistPairs"][0]["stylistName"] == "Jane Doe"


def test_commit_without_body_uses_default_client(client, sink):
    session_id = _ready_session(client)
    response = client.post(f"/api/v1/bookings/{session_id}/commit")
    assert response.status_code == 200
    assert sink.appointments["mock_appointment_1"]["clientId"] == "guest"


def test_toggle_off_removes_assignment(client):
    session_id = _start(client)
    base = f"/api/v1/bookings/{session_id}"
    client.post(f"{base}/branch", json={"branch_id": "b1"})
    client.post(f"{base}/services/toggle", json={"service_id": "s1"})
    client.post(f"{base}/stylists", json={"service_id": "s1", "stylist_id": "st1"})

    state = client.post(f"{base}/services/toggle", json={"service_id": "s1"}).json()
    assert state["services"] == []
    assert state["stylist_assignments"] == {}


def test_error_mapping(client):
    session_id = _start(client)
    base = f"/api/v1/bookings/{session_id}"

    assert client.get("/api/v1/bookings/unknown").status_code == 404
    assert client.post(f"{base}/branch", json={"branch_id": "b3"}).status_code == 400
    assert client.post(f"{base}/services/toggle", json={"service_id": "s1"}).status_code == 400

    client.post(f"{base}/branch", json={"branch_id": "b1"})
    assert client.post(f"{base}/datetime", json={"date": "2025-03-10", "time": "7:00"}).status_code == 400
    assert client.post(f"{base}/services/toggle", json={"service_id": "s5"}).status_code == 400
    assert client.post(f"{base}/stylists", json={"service_id": "s1", "stylist_id": "st1"}).status_code == 409
    assert client.post(f"{base}/confirm").status_code == 409
    assert client.post(f"{base}/commit").status_code == 409

    client.post(f"{base}/services/toggle", json={"service_id": "s3"})
    # st1 does not perform manicures, st3 is unavailable
    assert client.post(f"{base}/stylists", json={"service_id": "s3", "stylist_id": "st1"}).status_code == 400
    assert client.post(f"{base}/stylists", json={"service_id": "s3", "stylist_id": "st3"}).status_code == 400


def test_navigation_and_reset(client):
    session_id = _ready_session(client)
    base = f"/api/v1/bookings/{session_id}"

    assert client.post(f"{base}/previous").json()["current_step"] == 3
    assert client.post(f"{base}/next").json()["current_step"] == 4
    assert client.post(f"{base}/notes", json={"notes": "x" * 501}).status_code == 400
    assert client.post(f"{base}/notes", json={"notes": "Quiet chair"}).json()["notes"] == "Quiet chair"

    state = client.post(f"{base}/reset").json()
    assert state["current_step"] == 1
    assert state["branch"] is None
    assert state["notes"] is None


def test_unassign_and_delete(client):
    session_id = _ready_session(client)
    base = f"/api/v1/bookings/{session_id}"

    state = client.delete(f"{base}/stylists/s1").json()
    assert state["stylist_assignments"] == {}

    assert client.delete(base).status_code == 204
    assert client.get(base).status_code == 404


def test_failed_commit_keeps_booking_for_retry():
    client = _make_client(FailingSink())
    try:
        session_id = _ready_session(client)
        base = f"/api/v1/bookings/{session_id}"

        response = client.post(f"{base}/commit")
        assert response.status_code == 502

        state = client.get(base).json()
        assert state["is_submitting"] is False
        assert state["last_error"] == "Backend rejected the appointment (503)"
        assert state["current_step"] == 4
        assert [s["id"] for s in state["services"]] == ["s1"]
    finally:
        app.dependency_overrides.clear()
