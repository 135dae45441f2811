"""
Abstract Storage Interface

DESIGN DECISION: The app keeps all of its data in a single JSON blob
under one key, the same way a browser keeps it in localStorage.
We only need three operations, so the interface is a plain key-value slot.
This allows us to:
1. Use in-memory storage for testing
2. Keep data in a local directory for the Streamlit app
3. Swap in a remote store later without touching the store or gateway
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for a string key-value store.

    Implementations raise StorageError (or a subclass) on failure.
    Callers decide whether a failure is fatal.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            QuotaExceededError: If the backend is out of space
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the delete fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class QuotaExceededError(StorageError):
    """The backend has no room for the value being written."""
    pass
