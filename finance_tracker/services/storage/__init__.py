"""
Storage Services Package

Provides the abstract key-value interface and concrete implementations.
"""

from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    QuotaExceededError,
    StorageError,
)
from finance_tracker.services.storage.json_file import JsonFileStorage
from finance_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "QuotaExceededError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
