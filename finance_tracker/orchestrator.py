"""
App Wiring

Builds the storage backend, store and persistence gateway from settings
and connects them:

1. Load saved data into the store (gateway.init)
2. Subscribe gateway.persist so every mutation is saved

The gateway must be initialized BEFORE persist is subscribed. Subscribing
replays the current state immediately, and replaying the empty pre-load
state would overwrite the saved data.
"""

from typing import Optional

from finance_tracker.audit.logger import get_logger
from finance_tracker.config import TrackerSettings, get_settings
from finance_tracker.services.persistence import PersistenceGateway
from finance_tracker.services.storage import (
    JsonFileStorage,
    KeyValueStorageInterface,
)
from finance_tracker.store import Store


logger = get_logger(__name__)


def create_app_components(
    settings: Optional[TrackerSettings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> tuple[Store, PersistenceGateway]:
    """
    Create and wire the store and gateway.

    Args:
        settings: Settings to use. Defaults to get_settings().
        storage: Backend to use. Defaults to JsonFileStorage(settings.data_dir).

    Returns:
        (store, gateway) with saved data loaded and persistence subscribed
    """
    settings = settings or get_settings()
    storage = storage or JsonFileStorage(settings.data_dir)

    store = Store(default_currency=settings.default_currency)
    gateway = PersistenceGateway(
        store,
        storage,
        storage_key=settings.storage_key,
        app_version=settings.app_version,
        default_currency=settings.default_currency,
    )

    gateway.init()
    store.subscribe(gateway.persist)

    logger.info(
        "app_components_created",
        storage=type(storage).__name__,
        storage_key=settings.storage_key,
    )
    return store, gateway
