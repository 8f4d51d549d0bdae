from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # API Settings
    PROJECT_NAME: str = "Rental Admin API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Booking calendar and ledger service for the rental dashboard"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Booking backend (schema://domain:port/project-folder/public/api)
    BACKEND_SCHEMA: str = "http"
    BACKEND_DOMAIN: str = "localhost"
    BACKEND_PORT: int = 80
    BACKEND_PROJECT_FOLDER: str = "booking-backend"
    BACKEND_PUBLIC_DIR: str = "public"
    BACKEND_API_ENDPOINT: str = "api"
    BACKEND_TIMEOUT: float = 30.0

    # Bookings
    DEFAULT_PREP_DAYS: int = 3
    CURRENCY: str = "OMR"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

    @property
    def backend_base_url(self) -> str:
        port = f":{self.BACKEND_PORT}" if self.BACKEND_PORT != 80 else ""
        return (
            f"{self.BACKEND_SCHEMA}://{self.BACKEND_DOMAIN}{port}"
            f"/{self.BACKEND_PROJECT_FOLDER}/{self.BACKEND_PUBLIC_DIR}/{self.BACKEND_API_ENDPOINT}"
        )

settings = Settings()
