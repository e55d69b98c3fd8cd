"""Application configuration using pydantic-settings."""
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


REQUIRED_ENV_VARS = (
    "FB_PROJECT_ID",
    "FB_CLIENT_EMAIL",
    "FB_PRIVATE_KEY",
    "FB_DATABASE_URL",
    "ADMIN_API_KEY",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at process start and treated as read-only afterwards; the
    Firebase app and the adapters are constructed from this object.
    """
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[3] / ".env"),
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Firebase service account
    fb_project_id: str = Field(min_length=1)
    fb_client_email: str = Field(min_length=1)
    fb_private_key: str = Field(min_length=1, repr=False)
    fb_database_url: str = Field(min_length=1)

    # Shared secret for the admin routes
    admin_api_key: str = Field(min_length=1, repr=False)

    # Application
    log_level: str = "INFO"
    log_json: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # Realtime Database layout
    deliveries_path: str = "deliveries"
    scale_tickets_path: str = "scaleTickets"
    ratings_path: str = "ratings"
    driver_profiles_path: str = "driverProfiles"
    driver_uploads_path: str = "driverUploads"

    # Firebase Auth caps listUsers pages at 1000
    identity_page_size: int = Field(default=1000, ge=1, le=1000)

    @field_validator("fb_private_key")
    @classmethod
    def _normalize_private_key(cls, value: str) -> str:
        # Some hosts store the PEM newlines as a literal "\n"
        return value.replace("\\n", "\n")

    @field_validator("fb_project_id", "fb_client_email", "fb_database_url", "admin_api_key")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    def service_account_info(self) -> dict[str, str]:
        """Service-account payload accepted by ``firebase_admin.credentials.Certificate``."""
        return {
            "type": "service_account",
            "project_id": self.fb_project_id,
            "client_email": self.fb_client_email,
            "private_key": self.fb_private_key,
            "token_uri": "https://oauth2.googleapis.com/token",
        }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
