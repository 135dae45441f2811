"""
Persistence Gateway

Translates between the store's in-memory state and a single JSON
document kept under one key in a key-value backend.

DESIGN DECISION: Persistence never crashes the app.
- Missing or corrupted data loads as an empty document (defaults apply)
- A failed write is logged and the app keeps working from memory
- Imports are coerced field by field; one bad field doesn't reject the file

Only `currency`, `transactions` and `categories` are ever written.
UI state stays in memory.
"""

import json
from collections.abc import Mapping
from datetime import date
from typing import Any, Optional, Union

from finance_tracker.audit.logger import get_logger
from finance_tracker.config.settings import STORAGE_KEY
from finance_tracker.models.transaction import (
    DEFAULT_APP_VERSION,
    DEFAULT_CURRENCY,
    AppState,
    ExportDocument,
    Transaction,
)
from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)
from finance_tracker.store.state import Store


logger = get_logger(__name__)


class PersistenceGateway:
    """
    Loads, saves, exports, imports and clears the store's persisted data.

    Usage:
        gateway = PersistenceGateway(store, JsonFileStorage(data_dir))
        gateway.init()
        store.subscribe(gateway.persist)
    """

    def __init__(
        self,
        store: Store,
        storage: KeyValueStorageInterface,
        storage_key: str = STORAGE_KEY,
        app_version: str = DEFAULT_APP_VERSION,
        default_currency: str = DEFAULT_CURRENCY,
    ):
        self._store = store
        self._storage = storage
        self._storage_key = storage_key
        self._app_version = app_version
        self._default_currency = default_currency

    @property
    def storage_key(self) -> str:
        return self._storage_key

    # =========================================================================
    # LOAD / SAVE
    # =========================================================================

    def _load(self) -> dict:
        """Read the stored document. Returns {} on first run or bad data."""
        try:
            raw = self._storage.get_item(self._storage_key)
        except StorageError as e:
            logger.error("storage_load_failed", key=self._storage_key, error=str(e))
            return {}

        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.error("storage_load_failed", key=self._storage_key, error=str(e))
            return {}

        if not isinstance(data, dict):
            logger.warning(
                "storage_data_invalid",
                key=self._storage_key,
                found=type(data).__name__,
            )
            return {}

        return data

    def _save(self, state: AppState) -> bool:
        """Write the persisted subset of a state. Failures are logged, not raised."""
        try:
            document = state.persisted().to_document()
            self._storage.set_item(self._storage_key, json.dumps(document))
        except (StorageError, TypeError, ValueError) as e:
            logger.error("storage_save_failed", key=self._storage_key, error=str(e))
            return False
        return True

    def init(self) -> None:
        """
        Load saved data into the store, then save once.

        The immediate save captures defaults (e.g. default categories)
        on the very first run.
        """
        self._store.init(self._load())
        self._save(self._store.get_state())

    def persist(self, state: Optional[AppState] = None) -> bool:
        """
        Save the store's current state.

        Takes an optional state so it can be passed straight to
        Store.subscribe(); the store's own state is always what's saved.
        """
        return self._save(self._store.get_state())

    # =========================================================================
    # EXPORT / IMPORT
    # =========================================================================

    def export_data(self) -> str:
        """
        Pretty-printed JSON backup of the persisted data plus export metadata.

        If an extra transaction field can't be serialized, the backup is
        written without extra fields instead of failing.
        """
        state = self._store.get_state()
        document = ExportDocument(
            currency=state.currency,
            transactions=state.transactions,
            categories=state.categories,
            app_version=self._app_version,
        )
        try:
            payload = document.to_document()
        except ValueError as e:
            logger.error("export_extra_fields_dropped", error=str(e))
            document.transactions = [
                Transaction(**t.model_dump(exclude=set(t.model_extra or {})))
                for t in document.transactions
            ]
            payload = document.to_document()
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def import_data(self, payload: Any) -> bool:
        """
        Replace the store's data with an imported document.

        Returns False if the payload isn't an object. Each field is
        coerced on its own: a bad currency falls back to the default and
        a bad list becomes empty.
        """
        try:
            if not isinstance(payload, Mapping):
                logger.warning("import_rejected", found=type(payload).__name__)
                return False

            currency = payload.get("currency")
            transactions = payload.get("transactions")
            categories = payload.get("categories")

            validated = {
                "currency": currency if isinstance(currency, str) else self._default_currency,
                "transactions": transactions if isinstance(transactions, list) else [],
                "categories": categories if isinstance(categories, list) else [],
            }

            self._store.init(validated)
            self._save(self._store.get_state())

            logger.info(
                "data_imported",
                transactions=len(validated["transactions"]),
                categories=len(validated["categories"]),
            )
            return True

        except Exception:
            logger.exception("import_failed")
            return False

    def import_json(self, text: Union[str, bytes]) -> bool:
        """Parse an uploaded backup file and import it."""
        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as e:
            logger.warning("import_rejected", error=str(e))
            return False
        return self.import_data(payload)

    @staticmethod
    def backup_filename(today: Optional[date] = None) -> str:
        """Suggested file name for an export, e.g. trackmoni-backup-2025-01-31.json."""
        return f"trackmoni-backup-{(today or date.today()).isoformat()}.json"

    # =========================================================================
    # RESET
    # =========================================================================

    def clear_all(self) -> None:
        """Delete the stored data and reset the store to built-in defaults."""
        try:
            self._storage.remove_item(self._storage_key)
        except StorageError as e:
            logger.error("storage_clear_failed", key=self._storage_key, error=str(e))

        logger.info("data_cleared", key=self._storage_key)
        self._store.init()
