"""
Tests for committing a booking through a submit function / appointment sink.
"""

from __future__ import annotations

import asyncio

import pytest

from salon_booking.application.exceptions import (
    CommitInProgressError,
    IncompleteBookingError,
    SubmissionError,
    ValidationError,
)
from salon_booking.application.use_cases.booking_workflow import BookingWorkflow
from salon_booking.application.use_cases.submit_appointment import SubmitAppointmentUseCase
from salon_booking.domain.entities.booking_selection import WorkflowState
from salon_booking.domain.entities.branch import BranchSelection
from salon_booking.domain.entities.client import ClientInfo
from salon_booking.domain.entities.service import SelectedService
from salon_booking.domain.entities.stylist import SelectedStylist
from salon_booking.infrastructure.appointments.mock_sink import MockAppointmentSink

MAIN = BranchSelection(id="b1", name="Main", address="123 St", city="Metro")
HAIRCUT = SelectedService(id="s1", name="Haircut", price=500, duration=30, category="Haircut")
JANE = SelectedStylist(id="st1", name="Jane", first_name="Jane", last_name="Doe")
CLIENT = ClientInfo(id="c1", first_name="Ada", last_name="Lovelace", email="ada@example.com", phone="+100")


class RecordingSubmit:
    def __init__(self, result: str = "apt123", error: Exception | None = None) -> None:
        self.calls = []
        self._result = result
        self._error = error

    async def __call__(self, request):
        self.calls.append(request)
        if self._error is not None:
            raise self._error
        return self._result


def _ready_workflow() -> BookingWorkflow:
    workflow = BookingWorkflow()
    workflow.set_branch(MAIN)
    workflow.set_date_time("2025-03-10", "14:00")
    workflow.toggle_service(HAIRCUT)
    workflow.assign_stylist("s1", JANE)
    workflow.confirm_service_selection()
    return workflow


@pytest.mark.asyncio
async def test_successful_commit_resets_to_initial_state():
    workflow = _ready_workflow()
    submit = RecordingSubmit()

    appointment_id = await workflow.commit(submit)

    assert appointment_id == "apt123"
    assert workflow.state == WorkflowState()
    assert workflow.current_step == 1
    assert len(submit.calls) == 1

    request = submit.calls[0]
    assert request.services == (HAIRCUT,)
    assert request.service_stylist_pairs[0].service_id == "s1"
    assert request.service_stylist_pairs[0].stylist_id == "st1"
    assert request.total_price == 500
    assert request.total_duration == 30
    assert request.status == "scheduled"


@pytest.mark.asyncio
async def test_commit_with_no_services_never_calls_submit():
    workflow = BookingWorkflow()
    workflow.set_branch(MAIN)
    workflow.set_date_time("2025-03-10", "14:00")
    submit = RecordingSubmit()

    with pytest.raises(IncompleteBookingError):
        await workflow.commit(submit)

    assert submit.calls == []
    assert workflow.is_submitting is False


@pytest.mark.asyncio
async def test_commit_with_missing_branch_never_calls_submit():
    workflow = BookingWorkflow()
    workflow.toggle_service(HAIRCUT)
    submit = RecordingSubmit()

    with pytest.raises(IncompleteBookingError) as exc_info:
        await workflow.commit(submit)

    assert exc_info.value.missing == ["branch", "date", "time"]
    assert submit.calls == []


@pytest.mark.asyncio
async def test_failed_commit_keeps_selection_and_records_error():
    workflow = _ready_workflow()
    before = workflow.selection
    submit = RecordingSubmit(error=ConnectionError("network unreachable"))

    with pytest.raises(SubmissionError) as exc_info:
        await workflow.commit(submit)

    assert isinstance(exc_info.value.__cause__, ConnectionError)
    assert workflow.is_submitting is False
    assert workflow.last_error == "network unreachable"
    assert workflow.selection == before
    assert workflow.current_step == 4


@pytest.mark.asyncio
async def test_retry_after_failure_succeeds():
    workflow = _ready_workflow()

    with pytest.raises(SubmissionError):
        await workflow.commit(RecordingSubmit(error=SubmissionError("Backend rejected the appointment (503)")))
    assert workflow.last_error == "Backend rejected the appointment (503)"

    assert await workflow.commit(RecordingSubmit(result="apt456")) == "apt456"
    assert workflow.state == WorkflowState()


@pytest.mark.asyncio
async def test_next_mutation_clears_last_error():
    workflow = _ready_workflow()
    with pytest.raises(SubmissionError):
        await workflow.commit(RecordingSubmit(error=RuntimeError("boom")))

    workflow.set_date_time("2025-03-11", "10:00")
    assert workflow.last_error is None


@pytest.mark.asyncio
async def test_is_submitting_while_awaiting_the_sink():
    workflow = _ready_workflow()
    seen = []

    async def submit(request):
        seen.append(workflow.is_submitting)
        return "apt1"

    await workflow.commit(submit)
    assert seen == [True]
    assert workflow.is_submitting is False


@pytest.mark.asyncio
async def test_concurrent_commit_is_rejected():
    workflow = _ready_workflow()
    release = asyncio.Event()
    second = RecordingSubmit()

    async def slow_submit(request):
        await release.wait()
        return "apt1"

    first = asyncio.create_task(workflow.commit(slow_submit))
    await asyncio.sleep(0)
    assert workflow.is_submitting is True

    with pytest.raises(CommitInProgressError):
        await workflow.commit(second)
    assert second.calls == []

    release.set()
    assert await first == "apt1"
    assert workflow.is_submitting is False


@pytest.mark.asyncio
async def test_cancelled_commit_clears_submitting_flag():
    workflow = _ready_workflow()

    async def hanging_submit(request):
        await asyncio.Event().wait()

    task = asyncio.create_task(workflow.commit(hanging_submit))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert workflow.is_submitting is False
    assert workflow.selection.services == (HAIRCUT,)


@pytest.mark.asyncio
async def test_submit_use_case_persists_payload_through_sink():
    workflow = _ready_workflow()
    workflow.set_notes("Window seat please")
    sink = MockAppointmentSink()

    appointment_id = await workflow.commit(SubmitAppointmentUseCase(sink=sink, client=CLIENT))

    assert appointment_id == "mock_appointment_1"
    document = sink.appointments[appointment_id]
    assert document["clientId"] == "c1"
    assert document["clientName"] == "Ada Lovelace"
    assert document["createdBy"] == "c1"
    assert document["branchId"] == "b1"
    assert document["appointmentDate"] == "2025-03-10"
    assert document["appointmentTime"] == "14:00"
    assert document["totalCost"] == 500
    assert document["status"] == "scheduled"
    assert document["notes"] == "Window seat please"
    assert document["serviceStylistPairs"] == [
        {
            "serviceId": "s1",
            "serviceName": "Haircut",
            "servicePrice": 500,
            "stylistId": "st1",
            "stylistName": "Jane Doe",
        }
    ]
    assert document["history"][0]["action"] == "created"


@pytest.mark.asyncio
async def test_submit_use_case_requires_client_identity():
    sink = MockAppointmentSink()
    submit = SubmitAppointmentUseCase(sink=sink, client=ClientInfo(id="", first_name="Ada"))

    with pytest.raises(ValidationError):
        await submit(_ready_workflow().build_request())
    assert sink.appointments == {}
