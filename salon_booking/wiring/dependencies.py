from functools import lru_cache
import logging

from salon_booking.core.config import settings
from salon_booking.application.ports.appointment_sink import AppointmentSinkPort
from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.application.ports.session_store import BookingSessionStorePort
from salon_booking.application.use_cases.booking_session import BookingSessionUseCase
from salon_booking.application.use_cases.catalog import CatalogUseCase
from salon_booking.domain.entities.client import ClientInfo
from salon_booking.infrastructure.appointments.firestore_sink import FirestoreAppointmentSink
from salon_booking.infrastructure.appointments.mock_sink import MockAppointmentSink
from salon_booking.infrastructure.catalog.firestore_catalog import FirestoreCatalog
from salon_booking.infrastructure.catalog.json_catalog import JsonCatalog
from salon_booking.infrastructure.store.json_store import JsonBookingSessionStore
from salon_booking.infrastructure.store.memory_store import MemoryBookingSessionStore

logger = logging.getLogger(__name__)


def _use_local_backends() -> bool:
    return settings.ENV.lower() in {"dev", "local"} or not settings.FIREBASE_PROJECT_ID


@lru_cache
def get_catalog() -> CatalogPort:
    if settings.CATALOG_PROVIDER.lower() == "firestore" and not _use_local_backends():
        logger.info("Using Firestore catalog")
        return FirestoreCatalog()
    logger.info("Using JSON catalog", extra={"path": settings.CATALOG_DATA_PATH or "<bundled>"})
    return JsonCatalog(data_path=settings.CATALOG_DATA_PATH)


@lru_cache
def get_appointment_sink() -> AppointmentSinkPort:
    if settings.APPOINTMENT_SINK.lower() == "firestore" and not _use_local_backends():
        logger.info("Using Firestore appointment sink")
        return FirestoreAppointmentSink()
    logger.info("Using MockAppointmentSink")
    return MockAppointmentSink()


@lru_cache
def get_session_store() -> BookingSessionStorePort:
    if settings.SESSION_STORE.lower() == "json":
        return JsonBookingSessionStore(data_dir=settings.SESSION_DATA_DIR)
    return MemoryBookingSessionStore()


def get_catalog_use_case() -> CatalogUseCase:
    return CatalogUseCase(catalog=get_catalog())


def get_workflow_options() -> dict[str, object]:
    return {
        "business_open_hour": settings.BUSINESS_OPEN_HOUR,
        "business_close_hour": settings.BUSINESS_CLOSE_HOUR,
        "notes_max_length": settings.NOTES_MAX_LENGTH,
        "require_stylist_per_service": settings.REQUIRE_STYLIST_PER_SERVICE,
        "default_status": settings.BOOKING_DEFAULT_STATUS,
    }


def get_booking_session_use_case() -> BookingSessionUseCase:
    return BookingSessionUseCase(
        store=get_session_store(),
        catalog=get_catalog_use_case(),
        sink=get_appointment_sink(),
        workflow_options=get_workflow_options(),
    )


def get_default_client() -> ClientInfo:
    return ClientInfo(
        id=settings.DEFAULT_CLIENT_ID,
        first_name=settings.DEFAULT_CLIENT_FIRST_NAME,
        last_name=settings.DEFAULT_CLIENT_LAST_NAME,
    )
