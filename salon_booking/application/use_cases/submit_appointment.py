from __future__ import annotations

import logging

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.ports.appointment_sink import AppointmentSinkPort
from salon_booking.domain.entities.appointment import AppointmentPayload, AppointmentRequest
from salon_booking.domain.entities.client import ClientInfo


class SubmitAppointmentUseCase:
    """Submit function for BookingWorkflow.commit: attaches the client and persists via the sink."""

    def __init__(self, sink: AppointmentSinkPort, client: ClientInfo) -> None:
        self._sink = sink
        self._client = client
        self._logger = logging.getLogger(__name__)

    async def __call__(self, request: AppointmentRequest) -> str:
        return await self.execute(request)

    async def execute(self, request: AppointmentRequest) -> str:
        if not self._client.id or not self._client.id.strip():
            raise ValidationError("Client id is required to book an appointment")
        if not self._client.full_name:
            raise ValidationError("Client name is required to book an appointment")

        payload = AppointmentPayload(client=self._client, request=request)
        appointment_id = await self._sink.create_appointment(payload)
        self._logger.info(
            "Appointment created",
            extra={"appointment_id": appointment_id, "branch_id": request.branch_id},
        )
        return appointment_id
