class BookingError(Exception):
    """Base class for booking workflow failures."""
    pass


class ValidationError(BookingError):
    """Raised when a setter receives malformed or missing input."""
    pass


class InvalidAssignmentError(BookingError):
    """Raised when a stylist is assigned to a service that is not selected."""
    pass


class EmptySelectionError(BookingError):
    """Raised when the service selection is confirmed with no services."""
    pass


class IncompleteBookingError(BookingError):
    """Raised when committing a booking with missing branch, date, time or services."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Booking is incomplete, missing: {', '.join(self.missing)}")


class CommitInProgressError(BookingError):
    """Raised when commit is called while a previous commit is still awaiting the sink."""
    pass


class SubmissionError(BookingError):
    """Raised when the appointment sink rejects or fails to persist a booking."""
    pass


class CatalogUnavailableError(RuntimeError):
    """Raised when the catalog provider fails (timeouts, network errors, bad data)."""
    pass


class SessionNotFoundError(BookingError):
    """Raised when a booking session id is unknown or has expired."""
    pass
