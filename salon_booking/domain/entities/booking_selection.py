from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from salon_booking.domain.entities.branch import BranchSelection
from salon_booking.domain.entities.service import SelectedService
from salon_booking.domain.entities.stylist import SelectedStylist

FIRST_STEP = 1
LAST_STEP = 4

# Step numbers of the booking flow screens.
STEP_BRANCH = 1
STEP_DATE_TIME = 2
STEP_SERVICES = 3
STEP_SUMMARY = 4


@dataclass(frozen=True)
class BookingTotals:
    total_price: float = 0
    total_duration: int = 0


@dataclass(frozen=True)
class BookingSelection:
    branch: BranchSelection | None = None
    date: str | None = None  # YYYY-MM-DD
    time: str | None = None  # HH:MM
    services: tuple[SelectedService, ...] = ()
    stylist_assignments: Mapping[str, SelectedStylist] = field(default_factory=dict)
    current_step: int = FIRST_STEP
    notes: str | None = None

    def __post_init__(self) -> None:
        # Read-only copy; changes go through BookingWorkflow.
        object.__setattr__(self, "stylist_assignments", MappingProxyType(dict(self.stylist_assignments)))

    @property
    def service_ids(self) -> tuple[str, ...]:
        return tuple(s.id for s in self.services)

    def has_service(self, service_id: str) -> bool:
        return any(s.id == service_id for s in self.services)

    def totals(self) -> BookingTotals:
        return BookingTotals(
            total_price=sum(s.price for s in self.services),
            total_duration=sum(s.duration for s in self.services),
        )

    def missing_fields(self) -> list[str]:
        missing: list[str] = []
        if self.branch is None:
            missing.append("branch")
        if not self.date:
            missing.append("date")
        if not self.time:
            missing.append("time")
        if not self.services:
            missing.append("services")
        return missing

    def unassigned_service_ids(self) -> list[str]:
        return [s.id for s in self.services if s.id not in self.stylist_assignments]


@dataclass(frozen=True)
class WorkflowState:
    selection: BookingSelection = field(default_factory=BookingSelection)
    is_submitting: bool = False
    last_error: str | None = None
