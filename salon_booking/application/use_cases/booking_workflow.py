from __future__ import annotations

import logging
from dataclasses import replace
from typing import Awaitable, Callable

from salon_booking.application.exceptions import (
    CommitInProgressError,
    EmptySelectionError,
    IncompleteBookingError,
    InvalidAssignmentError,
    SubmissionError,
    ValidationError,
)
from salon_booking.application.utils.date_parser import (
    format_time_24h,
    is_within_business_hours,
    parse_iso_date,
    parse_time_24h,
)
from salon_booking.domain.entities.appointment import (
    DEFAULT_APPOINTMENT_STATUS,
    AppointmentRequest,
    ServiceStylistPair,
)
from salon_booking.domain.entities.booking_selection import (
    FIRST_STEP,
    LAST_STEP,
    STEP_BRANCH,
    STEP_DATE_TIME,
    STEP_SERVICES,
    STEP_SUMMARY,
    BookingSelection,
    BookingTotals,
    WorkflowState,
)
from salon_booking.domain.entities.branch import BranchSelection
from salon_booking.domain.entities.service import SelectedService
from salon_booking.domain.entities.stylist import SelectedStylist

SubmitFn = Callable[[AppointmentRequest], Awaitable[str]]


class BookingWorkflow:
    """
    Multi-step booking flow: branch -> date/time -> services and stylists -> summary.

    One instance owns one booking attempt. The state is an immutable
    WorkflowState that every operation replaces, so callers (session stores,
    the HTTP layer) can snapshot and restore it between requests.
    """

    def __init__(
        self,
        state: WorkflowState | None = None,
        business_open_hour: int = 8,
        business_close_hour: int = 20,
        notes_max_length: int = 500,
        require_stylist_per_service: bool = False,
        default_status: str = DEFAULT_APPOINTMENT_STATUS,
    ) -> None:
        self._state = state or WorkflowState()
        self._business_open_hour = business_open_hour
        self._business_close_hour = business_close_hour
        self._notes_max_length = notes_max_length
        self._require_stylist_per_service = require_stylist_per_service
        self._default_status = default_status
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def selection(self) -> BookingSelection:
        return self._state.selection

    @property
    def current_step(self) -> int:
        return self._state.selection.current_step

    @property
    def is_submitting(self) -> bool:
        return self._state.is_submitting

    @property
    def last_error(self) -> str | None:
        return self._state.last_error

    def snapshot(self) -> WorkflowState:
        return self._state

    def restore(self, state: WorkflowState) -> None:
        self._state = state

    # ── Step 1: branch ──────────────────────────────────────────────────────

    def set_branch(self, branch: BranchSelection) -> None:
        if branch is None:
            raise ValidationError("Branch is required")
        for field_name in ("id", "name", "address", "city"):
            _require_text(getattr(branch, field_name, None), f"branch.{field_name}")

        selection = self.selection
        step = STEP_DATE_TIME if selection.current_step == STEP_BRANCH else selection.current_step
        if selection.branch is not None and selection.branch.id != branch.id:
            # Services and stylists belong to a branch; a new branch starts them over.
            selection = replace(selection, services=(), stylist_assignments={})
            step = min(step, STEP_SERVICES)
        self._update(replace(selection, branch=branch, current_step=step), clear_error=True)
        self._logger.info("Branch selected", extra={"branch_id": branch.id, "step": step})

    # ── Step 2: date and time ───────────────────────────────────────────────

    def set_date_time(self, date: str, time: str) -> None:
        _require_text(date, "date")
        _require_text(time, "time")

        parsed_date = parse_iso_date(date)
        if parsed_date is None:
            raise ValidationError(f"Invalid date: {date!r}, expected YYYY-MM-DD")
        parsed_time = parse_time_24h(time)
        if parsed_time is None:
            raise ValidationError(f"Invalid time: {time!r}, expected HH:MM")
        hour, minute = parsed_time
        if not is_within_business_hours(hour, self._business_open_hour, self._business_close_hour):
            raise ValidationError(
                f"Time {time} is outside business hours "
                f"({self._business_open_hour}:00-{self._business_close_hour}:59)"
            )

        selection = self.selection
        # Never skip a step: a date picked before the branch leaves the flow at step 1.
        step = STEP_SERVICES if selection.current_step == STEP_DATE_TIME else selection.current_step
        self._update(
            replace(
                selection,
                date=parsed_date.isoformat(),
                time=format_time_24h(hour, minute),
                current_step=step,
            ),
            clear_error=True,
        )

    # ── Step 3: services and stylists ───────────────────────────────────────

    def toggle_service(self, service: SelectedService) -> bool:
        """Select the service, or deselect it if already selected. Returns True if now selected."""
        _validate_service(service)
        selection = self.selection

        if selection.has_service(service.id):
            services = tuple(s for s in selection.services if s.id != service.id)
            assignments = {k: v for k, v in selection.stylist_assignments.items() if k != service.id}
            self._update(replace(selection, services=services, stylist_assignments=assignments))
            self._logger.debug("Service deselected", extra={"service_id": service.id})
            return False

        self._update(replace(selection, services=selection.services + (service,)))
        self._logger.debug("Service selected", extra={"service_id": service.id})
        return True

    def assign_stylist(self, service_id: str, stylist: SelectedStylist) -> None:
        selection = self.selection
        if not selection.has_service(service_id):
            raise InvalidAssignmentError(f"Service {service_id!r} is not selected")
        if stylist is None:
            raise ValidationError("Stylist is required")
        _require_text(stylist.id, "stylist.id")

        assignments = dict(selection.stylist_assignments)
        assignments[service_id] = stylist
        self._update(replace(selection, stylist_assignments=assignments))

    def unassign_stylist(self, service_id: str) -> bool:
        selection = self.selection
        if service_id not in selection.stylist_assignments:
            return False
        assignments = {k: v for k, v in selection.stylist_assignments.items() if k != service_id}
        self._update(replace(selection, stylist_assignments=assignments))
        return True

    def confirm_service_selection(self) -> None:
        selection = self.selection
        if not selection.services:
            raise EmptySelectionError("Select at least one service before continuing")
        step = STEP_SUMMARY if selection.current_step == STEP_SERVICES else selection.current_step
        self._update(replace(selection, current_step=step), clear_error=True)

    # ── Step 4: summary ─────────────────────────────────────────────────────

    def set_notes(self, notes: str | None) -> None:
        text = (notes or "").strip()
        if len(text) > self._notes_max_length:
            raise ValidationError(f"Notes cannot exceed {self._notes_max_length} characters")
        self._update(replace(self.selection, notes=text or None))

    # ── Navigation ──────────────────────────────────────────────────────────

    def go_to_previous_step(self) -> int:
        selection = self.selection
        if selection.current_step > FIRST_STEP:
            self._update(replace(selection, current_step=selection.current_step - 1))
        return self.current_step

    def go_to_next_step(self) -> int:
        selection = self.selection
        if selection.current_step < LAST_STEP and self._step_complete(selection, selection.current_step):
            self._update(replace(selection, current_step=selection.current_step + 1))
        return self.current_step

    # ── Aggregates ──────────────────────────────────────────────────────────

    def compute_totals(self) -> BookingTotals:
        return self.selection.totals()

    def missing_fields(self) -> list[str]:
        missing = self.selection.missing_fields()
        if self._require_stylist_per_service:
            missing.extend(f"stylist:{sid}" for sid in self.selection.unassigned_service_ids())
        return missing

    def build_request(self) -> AppointmentRequest:
        missing = self.missing_fields()
        if missing:
            raise IncompleteBookingError(missing)

        selection = self.selection
        totals = selection.totals()
        pairs = []
        for service in selection.services:
            stylist = selection.stylist_assignments.get(service.id)
            pairs.append(
                ServiceStylistPair(
                    service_id=service.id,
                    service_name=service.name,
                    service_price=service.price,
                    stylist_id=stylist.id if stylist else None,
                    stylist_name=stylist.display_name if stylist else None,
                )
            )

        return AppointmentRequest(
            branch_id=selection.branch.id,
            branch_name=selection.branch.name,
            date=selection.date,
            time=selection.time,
            services=selection.services,
            service_stylist_pairs=tuple(pairs),
            total_price=totals.total_price,
            total_duration=totals.total_duration,
            notes=selection.notes,
            status=self._default_status,
        )

    # ── Commit / reset ──────────────────────────────────────────────────────

    async def commit(self, submit_fn: SubmitFn) -> str:
        """
        Hand the finalized booking to submit_fn and return the appointment id.

        On success the workflow goes back to the empty initial state. On
        failure the selection is kept so the caller can retry, last_error is
        set and SubmissionError is raised. is_submitting is always cleared.
        """
        if self._state.is_submitting:
            raise CommitInProgressError("A commit for this booking is already in progress")

        request = self.build_request()
        self._state = replace(self._state, is_submitting=True, last_error=None)

        try:
            appointment_id = await submit_fn(request)
        except Exception as e:
            reason = str(e) or e.__class__.__name__
            self._state = replace(self._state, is_submitting=False, last_error=reason)
            self._logger.warning("Appointment submission failed", extra={"reason": reason})
            if isinstance(e, SubmissionError):
                raise
            raise SubmissionError(reason) from e
        finally:
            if self._state.is_submitting:
                self._state = replace(self._state, is_submitting=False)

        self._state = WorkflowState()
        self._logger.info("Appointment committed", extra={"appointment_id": appointment_id})
        return appointment_id

    def reset(self) -> None:
        self._state = WorkflowState()

    # ── Internals ───────────────────────────────────────────────────────────

    def _update(self, selection: BookingSelection, clear_error: bool = False) -> None:
        last_error = None if clear_error else self._state.last_error
        self._state = replace(self._state, selection=selection, last_error=last_error)

    @staticmethod
    def _step_complete(selection: BookingSelection, step: int) -> bool:
        if step == STEP_BRANCH:
            return selection.branch is not None
        if step == STEP_DATE_TIME:
            return bool(selection.date and selection.time)
        if step == STEP_SERVICES:
            return bool(selection.services)
        return True


def _require_text(value: object, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")


def _validate_service(service: SelectedService) -> None:
    if service is None:
        raise ValidationError("Service is required")
    _require_text(service.id, "service.id")
    _require_text(service.name, "service.name")
    if service.price is None or service.price < 0:
        raise ValidationError(f"Service {service.id!r} has an invalid price")
    if service.duration is None or service.duration < 0:
        raise ValidationError(f"Service {service.id!r} has an invalid duration")
