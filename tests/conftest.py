"""Shared fixtures: a fresh store and in-memory storage per test."""

import pytest

from finance_tracker.config import STORAGE_KEY
from finance_tracker.services import InMemoryStorage, PersistenceGateway
from finance_tracker.store import Store


@pytest.fixture
def store() -> Store:
    store = Store()
    store.init({})
    return store


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def gateway(store: Store, storage: InMemoryStorage) -> PersistenceGateway:
    return PersistenceGateway(store, storage, storage_key=STORAGE_KEY)


@pytest.fixture
def recorder():
    """A subscriber that remembers every state it receives."""
    class Recorder:
        def __init__(self):
            self.states = []

        def __call__(self, state):
            self.states.append(state)

        @property
        def calls(self) -> int:
            return len(self.states)

    return Recorder()
