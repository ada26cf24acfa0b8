from __future__ import annotations

import logging
from typing import Any

from salon_booking.application.exceptions import (
    CommitInProgressError,
    InvalidAssignmentError,
    SessionNotFoundError,
    ValidationError,
)
from salon_booking.application.ports.appointment_sink import AppointmentSinkPort
from salon_booking.application.ports.session_store import BookingSessionStorePort
from salon_booking.application.use_cases.booking_workflow import BookingWorkflow
from salon_booking.application.use_cases.catalog import CatalogUseCase
from salon_booking.application.use_cases.submit_appointment import SubmitAppointmentUseCase
from salon_booking.domain.entities.appointment import AppointmentRequest
from salon_booking.domain.entities.client import ClientInfo
from salon_booking.domain.entities.service import SelectedService


class BookingSessionUseCase:
    """
    Drives one BookingWorkflow per client session across stateless requests.

    Each call loads the session's WorkflowState, applies one workflow
    operation and saves the resulting state back. Catalog ids coming from
    the client are resolved to catalog records before they reach the workflow.
    """

    def __init__(
        self,
        store: BookingSessionStorePort,
        catalog: CatalogUseCase,
        sink: AppointmentSinkPort,
        workflow_options: dict[str, Any] | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._sink = sink
        self._workflow_options = dict(workflow_options or {})
        self._logger = logging.getLogger(__name__)

    def start(self) -> str:
        session_id = self._store.create()
        self._logger.info("Booking session started", extra={"session_id": session_id})
        return session_id

    def get(self, session_id: str) -> BookingWorkflow:
        state = self._store.get(session_id)
        if state is None:
            raise SessionNotFoundError(f"Booking session {session_id!r} not found")
        return BookingWorkflow(state=state, **self._workflow_options)

    def delete(self, session_id: str) -> None:
        if not self._store.delete(session_id):
            raise SessionNotFoundError(f"Booking session {session_id!r} not found")

    def select_branch(self, session_id: str, branch_id: str) -> BookingWorkflow:
        workflow = self._editable(session_id)
        branch = self._catalog.get_active_branch(branch_id)
        if branch is None:
            raise ValidationError(f"Branch {branch_id!r} is not available for booking")
        workflow.set_branch(branch.to_selection())
        return self._save(session_id, workflow)

    def select_date_time(self, session_id: str, date: str, time: str) -> BookingWorkflow:
        workflow = self._editable(session_id)
        workflow.set_date_time(date, time)
        return self._save(session_id, workflow)

    def toggle_service(self, session_id: str, service_id: str) -> BookingWorkflow:
        workflow = self._editable(session_id)
        selected = next((s for s in workflow.selection.services if s.id == service_id), None)
        if selected is None:
            selected = self._resolve_service(workflow, service_id)
        workflow.toggle_service(selected)
        return self._save(session_id, workflow)

    def assign_stylist(self, session_id: str, service_id: str, stylist_id: str) -> BookingWorkflow:
        workflow = self._editable(session_id)
        if not workflow.selection.has_service(service_id):
            raise InvalidAssignmentError(f"Service {service_id!r} is not selected")

        branch = workflow.selection.branch
        stylist = self._catalog.get_stylist(branch.id, stylist_id) if branch else None
        if stylist is None:
            raise ValidationError(f"Stylist {stylist_id!r} does not work at this branch")
        if not stylist.is_available:
            raise ValidationError(f"Stylist {stylist.name} is not available")
        if stylist.service_ids and not stylist.can_perform(service_id):
            raise ValidationError(f"Stylist {stylist.name} does not perform this service")

        workflow.assign_stylist(service_id, stylist.to_selection())
        return self._save(session_id, workflow)

    def unassign_stylist(self, session_id: str, service_id: str) -> BookingWorkflow:
        workflow = self._editable(session_id)
        workflow.unassign_stylist(service_id)
        return self._save(session_id, workflow)

    def set_notes(self, session_id: str, notes: str | None) -> BookingWorkflow:
        workflow = self._editable(session_id)
        workflow.set_notes(notes)
        return self._save(session_id, workflow)

    def confirm_services(self, session_id: str) -> BookingWorkflow:
        workflow = self._editable(session_id)
        workflow.confirm_service_selection()
        return self._save(session_id, workflow)

    def previous_step(self, session_id: str) -> BookingWorkflow:
        workflow = self._editable(session_id)
        workflow.go_to_previous_step()
        return self._save(session_id, workflow)

    def next_step(self, session_id: str) -> BookingWorkflow:
        workflow = self._editable(session_id)
        workflow.go_to_next_step()
        return self._save(session_id, workflow)

    def reset(self, session_id: str) -> BookingWorkflow:
        workflow = self.get(session_id)
        workflow.reset()
        return self._save(session_id, workflow)

    async def commit(self, session_id: str, client: ClientInfo) -> tuple[str, BookingWorkflow]:
        workflow = self.get(session_id)
        if not client.id or not client.full_name:
            raise ValidationError("Client id and name are required to book an appointment")

        submit = SubmitAppointmentUseCase(sink=self._sink, client=client)

        async def submit_and_mark(request: AppointmentRequest) -> str:
            # Persist is_submitting so a concurrent request for the same session sees it.
            self._store.save(session_id, workflow.snapshot())
            return await submit(request)

        try:
            appointment_id = await workflow.commit(submit_and_mark)
        finally:
            self._store.save(session_id, workflow.snapshot())

        self._logger.info(
            "Booking session committed",
            extra={"session_id": session_id, "appointment_id": appointment_id},
        )
        return appointment_id, workflow

    def _resolve_service(self, workflow: BookingWorkflow, service_id: str) -> SelectedService:
        branch = workflow.selection.branch
        if branch is None:
            raise ValidationError("Select a branch before choosing services")
        offering = self._catalog.get_service(branch.id, service_id)
        if offering is None:
            raise ValidationError(f"Service {service_id!r} is not offered at {branch.name}")
        return offering.to_selection()

    def _editable(self, session_id: str) -> BookingWorkflow:
        workflow = self.get(session_id)
        if workflow.is_submitting:
            raise CommitInProgressError("This booking is being submitted and cannot be changed")
        return workflow

    def _save(self, session_id: str, workflow: BookingWorkflow) -> BookingWorkflow:
        self._store.save(session_id, workflow.snapshot())
        return workflow
