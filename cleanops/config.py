"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./cleanops.db",
        description="Database connection URL used by SQLAlchemy for the relational store",
        min_length=1,
    )
    firestore_project_id: str | None = Field(
        default=None,
        description="Google Cloud project id. When present the Firestore store is used",
    )
    firestore_credentials_file: str | None = Field(
        default=None,
        description="Path to a service account JSON file for Firestore",
    )
    firestore_database: str | None = Field(
        default=None,
        description="Named Firestore database, the default database when omitted",
    )
    app_timezone: str = Field(
        default="America/New_York",
        description="Timezone that defines the calendar day used for reminders",
    )
    reminder_interval_seconds: float = Field(
        default=60,
        description="Seconds between two reminder scans",
        gt=0,
    )
    reminder_tick_timeout_seconds: float | None = Field(
        default=None,
        description="Optional deadline for a single reminder scan",
        gt=0,
    )
    reminder_run_on_startup: bool = Field(
        default=True,
        description="Run a scan as soon as the scheduler starts",
    )
    reminder_scheduler_enabled: bool = Field(
        default=True,
        description="Start the background reminder timer with the application",
    )
    quote_pending_days: int = Field(
        default=2,
        description="Age in days after which a quotation needs a follow-up",
        ge=1,
    )
    notification_list_limit: int = Field(
        default=20,
        description="Default number of notifications returned by the pull API",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_firestore_options(self) -> "Settings":
        if self.firestore_credentials_file and not self.firestore_project_id:
            raise ValueError(
                "FIRESTORE_PROJECT_ID must be provided when FIRESTORE_CREDENTIALS_FILE is set"
            )
        return self

    @property
    def uses_document_store(self) -> bool:
        """Return ``True`` when Firestore is configured as the system of record."""

        return bool((self.firestore_project_id or "").strip())


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
