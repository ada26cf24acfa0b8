from __future__ import annotations

import logging
from typing import Any

from salon_booking.application.ports.appointment_sink import AppointmentSinkPort
from salon_booking.domain.entities.appointment import AppointmentPayload


class MockAppointmentSink(AppointmentSinkPort):
    def __init__(self) -> None:
        self._appointments: dict[str, dict[str, Any]] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def appointments(self) -> dict[str, dict[str, Any]]:
        return dict(self._appointments)

    async def create_appointment(self, payload: AppointmentPayload) -> str:
        appointment_id = f"mock_appointment_{len(self._appointments) + 1}"
        self._appointments[appointment_id] = payload.to_document()
        self._logger.info(
            "Mock appointment created",
            extra={
                "appointment_id": appointment_id,
                "branch_id": payload.request.branch_id,
                "date": payload.request.date,
                "time": payload.request.time,
            },
        )
        return appointment_id
