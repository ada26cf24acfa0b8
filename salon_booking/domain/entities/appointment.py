from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from salon_booking.domain.entities.client import ClientInfo
from salon_booking.domain.entities.service import SelectedService

DEFAULT_APPOINTMENT_STATUS = "scheduled"


@dataclass(frozen=True)
class ServiceStylistPair:
    service_id: str
    service_name: str
    service_price: float
    stylist_id: str | None = None
    stylist_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "serviceId": self.service_id,
            "serviceName": self.service_name,
            "servicePrice": self.service_price,
            "stylistId": self.stylist_id,
            "stylistName": self.stylist_name,
        }


@dataclass(frozen=True)
class AppointmentRequest:
    """Finalized booking handed by the workflow to the submit function."""

    branch_id: str
    branch_name: str
    date: str
    time: str
    services: tuple[SelectedService, ...]
    service_stylist_pairs: tuple[ServiceStylistPair, ...]
    total_price: float
    total_duration: int
    notes: str | None = None
    status: str = DEFAULT_APPOINTMENT_STATUS


@dataclass(frozen=True)
class AppointmentPayload:
    """Appointment document as persisted by the appointment sink."""

    client: ClientInfo
    request: AppointmentRequest
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_document(self) -> dict[str, Any]:
        created = self.created_at.isoformat()
        return {
            "clientId": self.client.id,
            "clientFirstName": self.client.first_name,
            "clientLastName": self.client.last_name,
            "clientName": self.client.full_name,
            "clientEmail": self.client.email or "",
            "clientPhone": self.client.phone or "",
            "branchId": self.request.branch_id,
            "branchName": self.request.branch_name,
            "appointmentDate": self.request.date,
            "appointmentTime": self.request.time,
            "services": [
                {
                    "id": s.id,
                    "name": s.name,
                    "price": s.price,
                    "duration": s.duration,
                    "category": s.category,
                }
                for s in self.request.services
            ],
            "serviceStylistPairs": [p.to_dict() for p in self.request.service_stylist_pairs],
            "totalCost": self.request.total_price,
            "totalDuration": self.request.total_duration,
            "status": self.request.status,
            "notes": self.request.notes or "",
            "createdBy": self.client.id,
            "history": [
                {
                    "action": "created",
                    "by": self.client.id,
                    "notes": "Appointment created",
                    "timestamp": created,
                }
            ],
            "createdAt": created,
            "updatedAt": created,
        }
