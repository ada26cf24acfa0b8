from __future__ import annotations

import uuid

from salon_booking.application.ports.session_store import BookingSessionStorePort
from salon_booking.domain.entities.booking_selection import WorkflowState


class MemoryBookingSessionStore(BookingSessionStorePort):
    def __init__(self) -> None:
        self._states: dict[str, WorkflowState] = {}

    def create(self) -> str:
        session_id = uuid.uuid4().hex
        self._states[session_id] = WorkflowState()
        return session_id

    def get(self, session_id: str) -> WorkflowState | None:
        return self._states.get(session_id)

    def save(self, session_id: str, state: WorkflowState) -> None:
        self._states[session_id] = state

    def delete(self, session_id: str) -> bool:
        return self._states.pop(session_id, None) is not None
