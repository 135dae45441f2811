"""
Reactive Store

The single source of truth for the app. Holds transactions, categories,
the currency preference and the ephemeral UI state (current view, open
modal, transaction being edited).

DESIGN DECISION: Every read returns a deep copy and every write goes
through a method on this class. After each mutation, every subscriber is
called synchronously, in registration order, with a full snapshot of the
state. This gives us:
1. No way to corrupt state through a returned object
2. One place where invariants are enforced
3. Persistence and rendering are just subscribers

GUARANTEES:
- Default categories are never removed
- A category used by any transaction is never removed
- A failing subscriber never stops the others or the mutation
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from finance_tracker.audit.logger import get_logger
from finance_tracker.models.transaction import (
    DEFAULT_CATEGORIES,
    DEFAULT_CURRENCY,
    AppState,
    ModalType,
    Transaction,
    View,
    to_number,
)
from finance_tracker.utils.formatting import generate_id


Subscriber = Callable[[AppState], Any]
Unsubscribe = Callable[[], None]

logger = get_logger(__name__)


class Store:
    """
    Owns the application state and its subscribers.

    Create one per app (or per test). Nothing in the package relies on a
    global instance.
    """

    def __init__(self, default_currency: str = DEFAULT_CURRENCY):
        self._default_currency = default_currency.upper()
        self._state = AppState(
            currency=self._default_currency,
            categories=list(DEFAULT_CATEGORIES),
        )
        self._subscribers: list[Subscriber] = []

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def init(self, loaded_data: Optional[Mapping] = None) -> None:
        """
        Initialize or reset the state from loosely typed loaded data.

        - transactions: kept if it is a list, otherwise empty
        - categories: kept if it is a non-empty list, otherwise the defaults.
          Defaults are NOT merged into a saved list.
        - currency: kept if it is a string, otherwise the default code

        UI state is always reset.
        """
        data = loaded_data if isinstance(loaded_data, Mapping) else {}

        transactions = self._coerce_transactions(data.get("transactions"))

        categories = self._coerce_categories(data.get("categories"))
        if not categories:
            categories = list(DEFAULT_CATEGORIES)

        currency = data.get("currency")
        if not isinstance(currency, str):
            currency = self._default_currency

        self._state = AppState(
            currency=currency.upper(),
            transactions=transactions,
            categories=categories,
        )

        logger.info(
            "store_initialized",
            transactions=len(transactions),
            categories=len(categories),
            currency=self._state.currency,
        )
        self._notify()

    @staticmethod
    def _coerce_transactions(raw: Any) -> list[Transaction]:
        if not isinstance(raw, list):
            return []

        transactions = []
        for index, item in enumerate(raw):
            if isinstance(item, Transaction):
                transactions.append(item.model_copy(deep=True))
                continue
            if not isinstance(item, Mapping):
                logger.warning("transaction_skipped", index=index, reason="not an object")
                continue
            try:
                transactions.append(Transaction.model_validate(dict(item)))
            except ValidationError as e:
                logger.warning("transaction_skipped", index=index, reason=str(e))
        return transactions

    @staticmethod
    def _coerce_categories(raw: Any) -> list[str]:
        if not isinstance(raw, list):
            return []
        return [c for c in raw if isinstance(c, str)]

    # =========================================================================
    # QUERIES (no notification)
    # =========================================================================

    def get_state(self) -> AppState:
        """Deep copy of the whole state."""
        return self._state.model_copy(deep=True)

    def get_transactions(self) -> list[Transaction]:
        return [t.model_copy(deep=True) for t in self._state.transactions]

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Copy of one transaction, or None if the id is unknown."""
        for transaction in self._state.transactions:
            if transaction.id == transaction_id:
                return transaction.model_copy(deep=True)
        return None

    def get_categories(self) -> list[str]:
        return list(self._state.categories)

    def get_currency(self) -> str:
        return self._state.currency

    @staticmethod
    def is_default_category(name: str) -> bool:
        return name in DEFAULT_CATEGORIES

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def set_currency(self, currency_code: Any) -> None:
        """Set the currency (e.g. 'usd' -> 'USD'). Ignores anything shorter than 3 chars."""
        if not isinstance(currency_code, str) or len(currency_code) < 3:
            return
        self._state.currency = currency_code.upper()
        self._notify()

    def add_transaction(self, data: Union[Mapping, Transaction]) -> Transaction:
        """
        Append a new transaction and return a copy of it.

        A fresh id is always generated. The amount is coerced to a number
        and a missing date becomes today. Category, type and sign are the
        caller's responsibility.
        """
        fields = data.model_dump() if isinstance(data, Transaction) else dict(data)
        fields["id"] = generate_id()

        transaction = Transaction.model_validate(fields)
        self._state.transactions.append(transaction)

        logger.debug("transaction_added", transaction_id=transaction.id)
        self._notify()
        return transaction.model_copy(deep=True)

    def update_transaction(self, transaction_id: str, updates: Mapping) -> bool:
        """
        Shallow-merge updates onto an existing transaction.

        A falsy `amount` in the updates keeps the previous amount.
        Returns False (and does not notify) if the id is unknown.
        """
        for index, existing in enumerate(self._state.transactions):
            if existing.id != transaction_id:
                continue

            merged = {**existing.model_dump(), **dict(updates)}
            merged["id"] = existing.id
            merged["amount"] = to_number(updates.get("amount") or existing.amount)

            self._state.transactions[index] = Transaction.model_validate(merged)

            logger.debug("transaction_updated", transaction_id=transaction_id)
            self._notify()
            return True

        return False

    def delete_transaction(self, transaction_id: str) -> None:
        """Remove every transaction with this id. Always notifies, even if none matched."""
        before = len(self._state.transactions)
        self._state.transactions = [
            t for t in self._state.transactions if t.id != transaction_id
        ]
        logger.debug(
            "transaction_deleted",
            transaction_id=transaction_id,
            removed=before - len(self._state.transactions),
        )
        self._notify()

    def add_category(self, name: Any) -> bool:
        """Add a category if it is non-empty after trimming and not already present."""
        if not isinstance(name, str):
            return False
        trimmed = name.strip()
        if not trimmed or trimmed in self._state.categories:
            return False

        self._state.categories.append(trimmed)
        self._notify()
        return True

    def remove_category(self, name: Any) -> bool:
        """
        Remove a user-defined category.

        Returns False without changing anything if the category is a
        default one or any transaction still uses it.
        """
        if not isinstance(name, str):
            return False
        trimmed = name.strip()
        if self.is_default_category(trimmed):
            return False

        if any(t.category == trimmed for t in self._state.transactions):
            return False

        self._state.categories = [c for c in self._state.categories if c != trimmed]
        self._notify()
        return True

    def set_view(self, view: Union[View, str]) -> bool:
        """Switch the current view. Unknown view names are ignored."""
        try:
            selected = View(view)
        except ValueError:
            return False

        self._state.current_view = selected
        self._notify()
        return True

    def open_modal(
        self,
        modal_type: Union[ModalType, str],
        editing_id: Optional[str] = None,
    ) -> None:
        self._state.modal_open = (
            modal_type.value if isinstance(modal_type, Enum) else modal_type
        )
        self._state.editing_transaction_id = editing_id
        self._notify()

    def close_modal(self) -> None:
        self._state.modal_open = None
        self._state.editing_transaction_id = None
        self._notify()

    # =========================================================================
    # SUBSCRIPTIONS
    # =========================================================================

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """
        Register a callback and call it once right away with the current state.

        Returns a function that removes this callback again.
        """
        if not callable(callback):
            return lambda: None

        self._subscribers.append(callback)
        self._deliver(callback)

        def unsubscribe() -> None:
            self._subscribers = [cb for cb in self._subscribers if cb is not callback]

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _notify(self) -> None:
        # Iterate over a copy: (un)subscribing inside a callback only
        # affects the next notification.
        for callback in list(self._subscribers):
            self._deliver(callback)

    def _deliver(self, callback: Subscriber) -> None:
        try:
            callback(self._state.model_copy(deep=True))
        except Exception:
            logger.exception(
                "subscriber_failed",
                subscriber=getattr(callback, "__qualname__", repr(callback)),
            )
