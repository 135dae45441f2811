"""
Services Package

Storage backends and the persistence gateway that sits between them
and the store.
"""

from finance_tracker.services.persistence import PersistenceGateway
from finance_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    QuotaExceededError,
    StorageError,
)

__all__ = [
    "PersistenceGateway",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "QuotaExceededError",
    "StorageError",
]
