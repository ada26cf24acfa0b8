"""
Tests for driving a booking workflow across requests through a session store.
"""

from __future__ import annotations

import asyncio
import tempfile

import pytest

from salon_booking.application.exceptions import (
    CommitInProgressError,
    EmptySelectionError,
    IncompleteBookingError,
    SessionNotFoundError,
    SubmissionError,
    ValidationError,
)
from salon_booking.application.ports.appointment_sink import AppointmentSinkPort
from salon_booking.application.use_cases.booking_session import BookingSessionUseCase
from salon_booking.application.use_cases.catalog import CatalogUseCase
from salon_booking.domain.entities.booking_selection import WorkflowState
from salon_booking.domain.entities.client import ClientInfo
from salon_booking.infrastructure.appointments.mock_sink import MockAppointmentSink
from salon_booking.infrastructure.catalog.json_catalog import JsonCatalog
from salon_booking.infrastructure.store.json_store import JsonBookingSessionStore
from salon_booking.infrastructure.store.memory_store import MemoryBookingSessionStore

CLIENT = ClientInfo(id="c1", first_name="Ada", last_name="Lovelace")


class BlockingSink(AppointmentSinkPort):
    def __init__(self, error: Exception | None = None) -> None:
        self.release = asyncio.Event()
        self.calls = 0
        self._error = error

    async def create_appointment(self, payload):
        self.calls += 1
        await self.release.wait()
        if self._error is not None:
            raise self._error
        return "apt1"


def _use_case(store=None, sink=None, **workflow_options) -> BookingSessionUseCase:
    return BookingSessionUseCase(
        store=store or MemoryBookingSessionStore(),
        catalog=CatalogUseCase(catalog=JsonCatalog()),
        sink=sink or MockAppointmentSink(),
        workflow_options=workflow_options,
    )


def _walk_to_summary(uc: BookingSessionUseCase) -> str:
    session_id = uc.start()
    uc.select_branch(session_id, "b1")
    uc.select_date_time(session_id, "2025-03-10", "14:00")
    uc.toggle_service(session_id, "s1")
    uc.toggle_service(session_id, "s2")
    uc.assign_stylist(session_id, "s1", "st2")
    uc.assign_stylist(session_id, "s2", "st1")
    uc.confirm_services(session_id)
    return session_id


def test_state_survives_between_calls_with_json_store():
    with tempfile.TemporaryDirectory() as tmpdir:
        uc = _use_case(store=JsonBookingSessionStore(data_dir=tmpdir))
        session_id = _walk_to_summary(uc)

        # A new use case over the same directory sees the same booking.
        workflow = _use_case(store=JsonBookingSessionStore(data_dir=tmpdir)).get(session_id)
        assert workflow.current_step == 4
        assert workflow.selection.branch.name == "Main"
        assert workflow.selection.service_ids == ("s1", "s2")
        assert {k: v.id for k, v in workflow.selection.stylist_assignments.items()} == {"s1": "st2", "s2": "st1"}
        assert workflow.compute_totals().total_price == 2000


@pytest.mark.asyncio
async def test_changing_branch_drops_services_from_previous_branch():
    sink = MockAppointmentSink()
    uc = _use_case(sink=sink)
    session_id = uc.start()
    uc.select_branch(session_id, "b1")
    uc.select_date_time(session_id, "2025-03-10", "14:00")
    uc.toggle_service(session_id, "s1")
    uc.assign_stylist(session_id, "s1", "st1")

    workflow = uc.select_branch(session_id, "b2")
    assert workflow.selection.branch.id == "b2"
    assert workflow.selection.services == ()
    assert dict(workflow.selection.stylist_assignments) == {}

    with pytest.raises(EmptySelectionError):
        uc.confirm_services(session_id)
    with pytest.raises(IncompleteBookingError):
        await uc.commit(session_id, CLIENT)
    assert sink.appointments == {}

    # Only services and stylists of the new branch can be booked there.
    with pytest.raises(ValidationError):
        uc.toggle_service(session_id, "s1")
    uc.toggle_service(session_id, "s5")
    uc.assign_stylist(session_id, "s5", "st4")
    uc.confirm_services(session_id)
    appointment_id, _ = await uc.commit(session_id, CLIENT)

    document = sink.appointments[appointment_id]
    assert document["branchId"] == "b2"
    assert [(p["serviceId"], p["stylistId"]) for p in document["serviceStylistPairs"]] == [("s5", "st4")]



def test_unknown_session():
    uc = _use_case()
    with pytest.raises(SessionNotFoundError):
        uc.get("missing")
    with pytest.raises(SessionNotFoundError):
        uc.delete("missing")


def test_workflow_options_are_applied():
    uc = _use_case(business_open_hour=10, business_close_hour=18)
    session_id = uc.start()
    uc.select_branch(session_id, "b1")
    with pytest.raises(ValidationError):
        uc.select_date_time(session_id, "2025-03-10", "09:00")


@pytest.mark.asyncio
async def test_commit_resets_session_and_persists_appointment():
    sink = MockAppointmentSink()
    uc = _use_case(sink=sink)
    session_id = _walk_to_summary(uc)

    appointment_id, workflow = await uc.commit(session_id, CLIENT)

    assert workflow.state == WorkflowState()
    assert uc.get(session_id).state == WorkflowState()
    document = sink.appointments[appointment_id]
    assert [p["stylistId"] for p in document["serviceStylistPairs"]] == ["st2", "st1"]
    assert document["totalCost"] == 2000
    assert document["totalDuration"] == 120


@pytest.mark.asyncio
async def test_commit_requires_client_identity():
    uc = _use_case()
    session_id = _walk_to_summary(uc)
    with pytest.raises(ValidationError):
        await uc.commit(session_id, ClientInfo(id="", first_name=""))
    assert uc.get(session_id).current_step == 4


@pytest.mark.asyncio
async def test_second_request_sees_commit_in_progress():
    sink = BlockingSink()
    uc = _use_case(sink=sink)
    session_id = _walk_to_summary(uc)

    first = asyncio.create_task(uc.commit(session_id, CLIENT))
    await asyncio.sleep(0)
    assert uc.get(session_id).is_submitting is True

    with pytest.raises(CommitInProgressError):
        await uc.commit(session_id, CLIENT)
    assert sink.calls == 1

    sink.release.set()
    appointment_id, _ = await first
    assert appointment_id == "apt1"
    assert uc.get(session_id).is_submitting is False


@pytest.mark.asyncio
async def test_edits_are_rejected_while_commit_is_in_flight():
    sink = BlockingSink(error=SubmissionError("Backend rejected the appointment (503)"))
    uc = _use_case(sink=sink)
    session_id = _walk_to_summary(uc)

    commit = asyncio.create_task(uc.commit(session_id, CLIENT))
    await asyncio.sleep(0)

    with pytest.raises(CommitInProgressError):
        uc.set_notes(session_id, "Quiet chair")
    with pytest.raises(CommitInProgressError):
        uc.toggle_service(session_id, "s3")
    with pytest.raises(CommitInProgressError):
        uc.previous_step(session_id)

    sink.release.set()
    with pytest.raises(SubmissionError):
        await commit

    workflow = uc.get(session_id)
    assert workflow.is_submitting is False
    assert workflow.last_error == "Backend rejected the appointment (503)"
    assert workflow.selection.service_ids == ("s1", "s2")
    assert workflow.selection.notes is None

    # Once the failed commit is settled the booking can be edited again.
    assert uc.set_notes(session_id, "Quiet chair").selection.notes == "Quiet chair"
