from __future__ import annotations

from pydantic import BaseModel, Field

from salon_booking.application.use_cases.booking_workflow import BookingWorkflow
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import ServiceOffering
from salon_booking.domain.entities.stylist import StylistProfile


class BranchSchema(BaseModel):
    id: str
    name: str
    address: str
    city: str
    hours: str | None = None
    is_active: bool = True

    @classmethod
    def from_entity(cls, branch: Branch) -> "BranchSchema":
        return cls(
            id=branch.id,
            name=branch.name,
            address=branch.address,
            city=branch.city,
            hours=branch.hours,
            is_active=branch.is_active,
        )


class ServiceSchema(BaseModel):
    id: str
    name: str
    price: float
    duration: int
    category: str = ""
    description: str | None = None
    is_chemical: bool = False

    @classmethod
    def from_entity(cls, service: ServiceOffering) -> "ServiceSchema":
        return cls(
            id=service.id,
            name=service.name,
            price=service.price,
            duration=service.duration,
            category=service.category,
            description=service.description,
            is_chemical=service.is_chemical,
        )


class StylistSchema(BaseModel):
    id: str
    name: str
    first_name: str = ""
    last_name: str = ""
    rating: float = 4.5
    is_available: bool = True
    service_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, stylist: StylistProfile) -> "StylistSchema":
        return cls(
            id=stylist.id,
            name=stylist.name,
            first_name=stylist.first_name,
            last_name=stylist.last_name,
            rating=stylist.rating,
            is_available=stylist.is_available,
            service_ids=list(stylist.service_ids),
        )


class SelectBranchRequestSchema(BaseModel):
    branch_id: str = Field(min_length=1)


class SelectDateTimeRequestSchema(BaseModel):
    date: str
    time: str


class ToggleServiceRequestSchema(BaseModel):
    service_id: str = Field(min_length=1)


class AssignStylistRequestSchema(BaseModel):
    service_id: str = Field(min_length=1)
    stylist_id: str = Field(min_length=1)


class NotesRequestSchema(BaseModel):
    notes: str | None = None


class ClientSchema(BaseModel):
    id: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = ""
    email: str | None = None
    phone: str | None = None


class CommitRequestSchema(BaseModel):
    client: ClientSchema | None = None


class SelectedServiceSchema(BaseModel):
    id: str
    name: str
    price: float
    duration: int
    category: str = ""


class SelectedStylistSchema(BaseModel):
    id: str
    name: str
    first_name: str = ""
    last_name: str = ""


class SelectedBranchSchema(BaseModel):
    id: str
    name: str
    address: str
    city: str


class TotalsSchema(BaseModel):
    total_price: float
    total_duration: int


class BookingStateSchema(BaseModel):
    session_id: str
    current_step: int
    branch: SelectedBranchSchema | None = None
    date: str | None = None
    time: str | None = None
    services: list[SelectedServiceSchema] = Field(default_factory=list)
    stylist_assignments: dict[str, SelectedStylistSchema] = Field(default_factory=dict)
    notes: str | None = None
    totals: TotalsSchema
    missing: list[str] = Field(default_factory=list)
    is_submitting: bool = False
    last_error: str | None = None

    @classmethod
    def from_workflow(cls, session_id: str, workflow: BookingWorkflow) -> "BookingStateSchema":
        selection = workflow.selection
        totals = workflow.compute_totals()
        branch = selection.branch
        return cls(
            session_id=session_id,
            current_step=selection.current_step,
            branch=(
                SelectedBranchSchema(id=branch.id, name=branch.name, address=branch.address, city=branch.city)
                if branch
                else None
            ),
            date=selection.date,
            time=selection.time,
            services=[
                SelectedServiceSchema(
                    id=s.id, name=s.name, price=s.price, duration=s.duration, category=s.category
                )
                for s in selection.services
            ],
            stylist_assignments={
                service_id: SelectedStylistSchema(
                    id=st.id, name=st.name, first_name=st.first_name, last_name=st.last_name
                )
                for service_id, st in selection.stylist_assignments.items()
            },
            notes=selection.notes,
            totals=TotalsSchema(total_price=totals.total_price, total_duration=totals.total_duration),
            missing=workflow.missing_fields(),
            is_submitting=workflow.is_submitting,
            last_error=workflow.last_error,
        )


class CommitResponseSchema(BaseModel):
    appointment_id: str
    booking: BookingStateSchema
