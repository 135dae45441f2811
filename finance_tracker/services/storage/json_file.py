"""
JSON File Storage

DESIGN DECISION: Each key is kept in its own file (`<key>.json`) inside a
data directory. This is the desktop equivalent of browser localStorage:
1. Nothing to install or configure
2. Users can open, copy or back up the file directly
3. Writes go through a temp file and os.replace, so a crash mid-write
   never leaves a half-written file behind

TRADEOFFS:
- No locking (single user, single process)
"""

import errno
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    QuotaExceededError,
    StorageError,
)


class JsonFileStorage(KeyValueStorageInterface):
    """Key-value storage backed by one file per key."""

    def __init__(self, directory: Union[str, Path]):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File path used for a key."""
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            if e.errno in (errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)):
                raise QuotaExceededError(f"No space left to write {path}") from e
            raise StorageError(f"Failed to write {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e
