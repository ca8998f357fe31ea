"""Configuration management."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="IBS_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data storage
    data_dir: Path = Field(default=Path("data"))
    store_filename: str = "ibs_tracker.json"

    # Keys inside the store
    logs_key: str = "ibsTrackerLogs"
    notification_key: str = "lastStressNotificationDate"

    # Export
    export_prefix: str = "ibs_tracker_data"
    export_dir: Path = Field(default=Path("."))

    # Daily stress reminder
    notifications_enabled: bool = True
    reminder_hour: int = Field(default=18, ge=0, le=23)
    reminder_interval_minutes: int = Field(default=5, ge=1)

    log_level: str = "INFO"

    @property
    def store_path(self) -> Path:
        """Path to the store file."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / self.store_filename


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
