"""
In-Memory Storage

Dict-backed key-value store. Used by the tests and as a fallback when
no data directory is available. An optional byte quota mimics the
limits of browser storage.
"""

from typing import Optional

from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    QuotaExceededError,
)


class InMemoryStorage(KeyValueStorageInterface):
    """Key-value storage held in a dict."""

    def __init__(self, max_bytes: Optional[int] = None):
        """
        Args:
            max_bytes: Total size limit across all stored values (UTF-8).
                       None means unlimited.
        """
        self._items: dict[str, str] = {}
        self._max_bytes = max_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._max_bytes is not None:
            used = sum(
                len(v.encode("utf-8"))
                for k, v in self._items.items()
                if k != key
            )
            needed = len(value.encode("utf-8"))
            if used + needed > self._max_bytes:
                raise QuotaExceededError(
                    f"Writing {needed} bytes to '{key}' exceeds quota of "
                    f"{self._max_bytes} bytes"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
