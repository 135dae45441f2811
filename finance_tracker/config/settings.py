"""
Configuration Management for Finance Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The core store has no environment of its own; these settings only decide
where data is kept and how the app logs.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finance_tracker.models.transaction import DEFAULT_APP_VERSION, DEFAULT_CURRENCY


STORAGE_KEY = "personalFinanceAppData"


class TrackerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from FINANCE_TRACKER_* environment variables
    and the .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    data_dir: Path = Field(
        default=Path(".finance_tracker"),
        description="Directory holding the JSON data files"
    )
    storage_key: str = Field(
        default=STORAGE_KEY,
        min_length=1,
        description="Key the app data is stored under"
    )

    # Defaults
    default_currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=3,
        description="Currency used when none has been saved"
    )
    app_version: str = Field(
        default=DEFAULT_APP_VERSION,
        description="Version tag written into exported backups"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON instead of console output"
    )

    @field_validator("default_currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()
