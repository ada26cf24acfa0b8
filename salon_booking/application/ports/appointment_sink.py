from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.appointment import AppointmentPayload


class AppointmentSinkPort(ABC):
    @abstractmethod
    async def create_appointment(self, payload: AppointmentPayload) -> str:
        """
        Persist a finalized appointment.

        Returns the appointment id. Raises SubmissionError when the backend
        rejects the request or cannot be reached.
        """
        raise NotImplementedError
