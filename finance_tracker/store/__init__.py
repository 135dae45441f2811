"""Reactive state store."""

from finance_tracker.store.state import Store, Subscriber, Unsubscribe

__all__ = ["Store", "Subscriber", "Unsubscribe"]
