from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    CATALOG_PROVIDER: str = "json"  # "json" | "firestore"
    CATALOG_DATA_PATH: str | None = None  # defaults to the bundled sample catalog
    APPOINTMENT_SINK: str = "mock"  # "mock" | "firestore"
    SESSION_STORE: str = "memory"  # "memory" | "json"
    SESSION_DATA_DIR: str = "./data/bookings"

    FIREBASE_PROJECT_ID: str | None = None
    FIRESTORE_DATABASE: str = "(default)"
    FIRESTORE_TIMEOUT_SECONDS: float = 10.0

    BOOKING_DEFAULT_STATUS: str = "scheduled"
    BUSINESS_OPEN_HOUR: int = 8
    BUSINESS_CLOSE_HOUR: int = 20
    NOTES_MAX_LENGTH: int = 500
    REQUIRE_STYLIST_PER_SERVICE: bool = False

    DEFAULT_CLIENT_ID: str = "guest"
    DEFAULT_CLIENT_FIRST_NAME: str = "Guest"
    DEFAULT_CLIENT_LAST_NAME: str = "Client"


settings = Settings()
