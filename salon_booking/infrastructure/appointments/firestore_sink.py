from __future__ import annotations

import logging

from google.cloud import exceptions as gexc
from google.cloud import firestore

from salon_booking.application.exceptions import SubmissionError
from salon_booking.application.ports.appointment_sink import AppointmentSinkPort
from salon_booking.core.config import settings
from salon_booking.domain.entities.appointment import AppointmentPayload

APPOINTMENTS_COLLECTION = "appointments"


class FirestoreAppointmentSink(AppointmentSinkPort):
    def __init__(
        self,
        project_id: str | None = None,
        client: firestore.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._project_id = project_id or settings.FIREBASE_PROJECT_ID
        self._timeout = timeout or settings.FIRESTORE_TIMEOUT_SECONDS
        self._logger = logging.getLogger(__name__)

        if client is None:
            if not self._project_id:
                raise ValueError("FIREBASE_PROJECT_ID is required for the Firestore appointment sink")
            client = firestore.AsyncClient(project=self._project_id, database=settings.FIRESTORE_DATABASE)
        self._db = client

    async def create_appointment(self, payload: AppointmentPayload) -> str:
        document = payload.to_document()
        # Creation times come from the server clock, not the API host.
        document["createdAt"] = firestore.SERVER_TIMESTAMP
        document["updatedAt"] = firestore.SERVER_TIMESTAMP

        try:
            _, ref = await self._db.collection(APPOINTMENTS_COLLECTION).add(document, timeout=self._timeout)
        except gexc.GoogleCloudError as e:
            code = getattr(e, "code", None)
            self._logger.error("Appointment rejected by backend", extra={"error": str(e)})
            if code is None:
                raise SubmissionError(f"Backend rejected the appointment: {e}") from e
            raise SubmissionError(f"Backend rejected the appointment ({int(code)})") from e

        appointment_id = getattr(ref, "id", None)
        if not appointment_id:
            raise SubmissionError("No appointment id returned from backend")

        self._logger.info("Appointment document created", extra={"appointment_id": appointment_id})
        return appointment_id
