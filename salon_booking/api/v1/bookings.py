import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Response

from salon_booking.api.v1.schemas import (
    AssignStylistRequestSchema,
    BookingStateSchema,
    CommitRequestSchema,
    CommitResponseSchema,
    NotesRequestSchema,
    SelectBranchRequestSchema,
    SelectDateTimeRequestSchema,
    ToggleServiceRequestSchema,
)
from salon_booking.application.exceptions import (
    CatalogUnavailableError,
    CommitInProgressError,
    EmptySelectionError,
    IncompleteBookingError,
    InvalidAssignmentError,
    SessionNotFoundError,
    SubmissionError,
    ValidationError,
)
from salon_booking.application.use_cases.booking_session import BookingSessionUseCase
from salon_booking.domain.entities.client import ClientInfo
from salon_booking.wiring.dependencies import get_booking_session_use_case, get_default_client

router = APIRouter()
logger = logging.getLogger(__name__)


@contextmanager
def _booking_errors() -> Iterator[None]:
    try:
        yield
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (InvalidAssignmentError, EmptySelectionError, IncompleteBookingError, CommitInProgressError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (SubmissionError, CatalogUnavailableError) as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("", response_model=BookingStateSchema, status_code=201)
def start_booking(uc: BookingSessionUseCase = Depends(get_booking_session_use_case)):
    session_id = uc.start()
    return BookingStateSchema.from_workflow(session_id, uc.get(session_id))


@router.get("/{session_id}", response_model=BookingStateSchema)
def get_booking(session_id: str, uc: BookingSessionUseCase = Depends(get_booking_session_use_case)):
    with _booking_errors():
        workflow = uc.get(session_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.delete("/{session_id}", status_code=204)
def delete_booking(session_id: str, uc: BookingSessionUseCase = Depends(get_booking_session_use_case)):
    with _booking_errors():
        uc.delete(session_id)
    return Response(status_code=204)


@router.post("/{session_id}/branch", response_model=BookingStateSchema)
def select_branch(
    session_id: str,
    req: SelectBranchRequestSchema,
    uc: BookingSessionUseCase = Depends(get_booking_session_use_case),
):
    with _booking_errors():
        workflow = uc.select_branch(session_id, req.branch_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/datetime", response_model=BookingStateSchema)
def select_date_time(
    session_id: str,
    req: SelectDateTimeRequestSchema,
    uc: BookingSessionUseCase = Depends(get_booking_session_use_case),
):
    with _booking_errors():
        workflow = uc.select_date_time(session_id, req.date, req.time)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/services/toggle", response_model=BookingStateSchema)
def toggle_service(
    session_id: str,
    req: ToggleServiceRequestSchema,
    uc: BookingSessionUseCase = Depends(get_booking_session_use_case),
):
    with _booking_errors():
        workflow = uc.toggle_service(session_id, req.service_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/stylists", response_model=BookingStateSchema)
def assign_stylist(
    session_id: str,
    req: AssignStylistRequestSchema,
    uc: BookingSessionUseCase = Depends(get_booking_session_use_case),
):
    with _booking_errors():
        workflow = uc.assign_stylist(session_id, req.service_id, req.stylist_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.delete("/{session_id}/stylists/{service_id}", response_model=BookingStateSchema)
def unassign_stylist(
    session_id: str,
    service_id: str,
    uc: BookingSessionUseCase = Depends(get_booking_session_use_case),
):
    with _booking_errors():
        workflow = uc.unassign_stylist(session_id, service_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/notes", response_model=BookingStateSchema)
def set_notes(
    session_id: str,
    req: NotesRequestSchema,
    uc: BookingSessionUseCase = Depends(get_booking_session_use_case),
):
    with _booking_errors():
        workflow = uc.set_notes(session_id, req.notes)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/confirm", response_model=BookingStateSchema)
def confirm_services(session_id: str, uc: BookingSessionUseCase = Depends(get_booking_session_use_case)):
    with _booking_errors():
        workflow = uc.confirm_services(session_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/previous", response_model=BookingStateSchema)
def previous_step(session_id: str, uc: BookingSessionUseCase = Depends(get_booking_session_use_case)):
    with _booking_errors():
        workflow = uc.previous_step(session_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/next", response_model=BookingStateSchema)
def next_step(session_id: str, uc: BookingSessionUseCase = Depends(get_booking_session_use_case)):
    with _booking_errors():
        workflow = uc.next_step(session_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/reset", response_model=BookingStateSchema)
def reset_booking(session_id: str, uc: BookingSessionUseCase = Depends(get_booking_session_use_case)):
    with _booking_errors():
        workflow = uc.reset(session_id)
    return BookingStateSchema.from_workflow(session_id, workflow)


@router.post("/{session_id}/commit", response_model=CommitResponseSchema)
async def commit_booking(
    session_id: str,
    req: CommitRequestSchema | None = None,
    uc: BookingSessionUseCase = Depends(get_booking_session_use_case),
    default_client: ClientInfo = Depends(get_default_client),
):
    client = default_client
    if req is not None and req.client is not None:
        client = ClientInfo(**req.client.model_dump())

    with _booking_errors():
        appointment_id, workflow = await uc.commit(session_id, client)

    logger.info("Appointment booked", extra={"session_id": session_id, "appointment_id": appointment_id})
    return CommitResponseSchema(
        appointment_id=appointment_id,
        booking=BookingStateSchema.from_workflow(session_id, workflow),
    )
