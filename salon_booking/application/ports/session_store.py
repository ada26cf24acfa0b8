from abc import ABC, abstractmethod

from salon_booking.domain.entities.booking_selection import WorkflowState


class BookingSessionStorePort(ABC):
    @abstractmethod
    def create(self) -> str:
        """Start a new booking session with an empty workflow state. Returns its id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> WorkflowState | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, session_id: str, state: WorkflowState) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        raise NotImplementedError
