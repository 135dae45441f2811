"""Configuration package."""

from finance_tracker.config.settings import (
    STORAGE_KEY,
    TrackerSettings,
    get_settings,
)

__all__ = [
    "STORAGE_KEY",
    "TrackerSettings",
    "get_settings",
]
