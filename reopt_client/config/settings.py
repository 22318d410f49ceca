"""REopt client settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from reopt_client.models.job import PollOptions


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Client settings loaded from environment variables / .env file.

    The API key has no default. Never hardcode it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- REopt API ---
    REOPT_API_KEY: str = Field(
        default="",
        description="NREL developer API key, sent as the api_key query parameter.",
    )
    REOPT_BASE_URL: str = Field(
        default="https://developer.nrel.gov/api/reopt/stable",
        description="Base URL of the REopt API.",
    )
    REOPT_HTTP_TIMEOUT_S: float = Field(
        default=120.0,
        gt=0.0,
        description="Per-request HTTP timeout in seconds.",
    )

    # --- Polling ---
    REOPT_POLL_INTERVAL_S: float = Field(
        default=5.0,
        ge=0.0,
        description="Seconds to wait between status fetches.",
    )
    REOPT_POLL_MAX_ATTEMPTS: int = Field(
        default=120,
        ge=1,
        description="Maximum status fetches before giving up (10 minutes at 5s).",
    )

    # --- Artifact storage ---
    ARTIFACT_ROOT: str = Field(
        default=".",
        description="Directory holding inputs/, outputs/, load_profiles/, electric_rates/.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD

    def poll_options(self) -> PollOptions:
        """Default polling options derived from these settings."""
        return PollOptions(
            interval_s=self.REOPT_POLL_INTERVAL_S,
            max_attempts=self.REOPT_POLL_MAX_ATTEMPTS,
        )


def get_settings() -> Settings:
    """Factory function so callers and tests can build fresh settings."""
    return Settings()
