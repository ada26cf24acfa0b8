from __future__ import annotations

from typing import Any

from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import ServiceOffering
from salon_booking.domain.entities.stylist import StylistProfile


def branch_from_record(data: dict[str, Any]) -> Branch:
    return Branch(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        address=str(data.get("address") or ""),
        city=str(data.get("city") or ""),
        hours=data.get("hours"),
        is_active=data.get("isActive") is not False,
    )


def service_from_record(data: dict[str, Any]) -> ServiceOffering:
    return ServiceOffering(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        price=data.get("price") or 0,
        duration=int(data.get("duration") or 0),
        category=str(data.get("category") or ""),
        description=data.get("description"),
        is_chemical=bool(data.get("isChemical", False)),
        is_active=data.get("isActive") is not False,
        branch_id=data.get("branchId"),
    )


def stylist_from_record(data: dict[str, Any]) -> StylistProfile:
    # Stylists are user documents; staff details live under "staffData".
    staff = data.get("staffData") or {}
    first_name = str(data.get("firstName") or "")
    last_name = str(data.get("lastName") or "")
    name = str(data.get("name") or f"{first_name} {last_name}".strip())
    return StylistProfile(
        id=str(data["id"]),
        name=name,
        first_name=first_name,
        last_name=last_name,
        rating=float(staff.get("rating") or data.get("rating") or 4.5),
        is_available=data.get("isAvailable") is not False,
        service_ids=tuple(staff.get("skills") or data.get("serviceIds") or ()),
        branch_id=staff.get("branchId") or data.get("branchId"),
    )
