"""
Tests for the reactive store.

Covers initialization, copy-on-read isolation, every mutation, the
category protection rules and subscriber notification.
"""

import pytest
from structlog.testing import capture_logs

from finance_tracker.models import (
    DEFAULT_CATEGORIES,
    ModalType,
    Transaction,
    View,
)
from finance_tracker.reports import calculate_totals
from finance_tracker.store import Store
from finance_tracker.utils import today_iso


def _income(amount=100, category="Salary", date="2025-01-05"):
    return {"amount": amount, "type": "income", "category": category, "date": date}


def _expense(amount=40, category="Groceries", date="2025-01-06"):
    return {"amount": amount, "type": "expense", "category": category, "date": date}


class TestInit:
    """Tests for Store.init."""

    def test_empty_data_uses_defaults(self, store):
        """A fresh init gives exactly the 19 default categories."""
        assert store.get_categories() == list(DEFAULT_CATEGORIES)
        assert store.get_transactions() == []
        assert store.get_currency() == "NGN"

    def test_none_uses_defaults(self):
        store = Store()
        store.init()
        assert store.get_categories() == list(DEFAULT_CATEGORIES)

    def test_saved_categories_are_not_merged_with_defaults(self, store):
        """If any categories were saved, defaults are not injected."""
        store.init({"categories": ["Custom"]})
        assert store.get_categories() == ["Custom"]

    def test_empty_saved_categories_fall_back_to_defaults(self, store):
        store.init({"categories": []})
        assert store.get_categories() == list(DEFAULT_CATEGORIES)

    def test_non_list_fields_are_replaced(self, store):
        """Wrongly typed fields fall back to defaults independently."""
        store.init({"transactions": "oops", "categories": {"a": 1}, "currency": 42})
        assert store.get_transactions() == []
        assert store.get_categories() == list(DEFAULT_CATEGORIES)
        assert store.get_currency() == "NGN"

    def test_non_string_categories_are_dropped(self, store):
        store.init({"categories": ["Custom", 3, None]})
        assert store.get_categories() == ["Custom"]

    def test_currency_is_kept_and_upper_cased(self, store):
        store.init({"currency": "usd"})
        assert store.get_currency() == "USD"

    def test_custom_default_currency(self):
        store = Store(default_currency="eur")
        store.init({})
        assert store.get_currency() == "EUR"

    def test_transactions_are_loaded_and_coerced(self, store):
        store.init({"transactions": [
            {"id": "t1", "amount": "12.5", "type": "expense", "category": "Fuel", "date": "2025-02-01"},
        ]})
        [t] = store.get_transactions()
        assert t.id == "t1"
        assert t.amount == 12.5

    def test_non_object_transactions_are_dropped(self, store):
        store.init({"transactions": [{"id": "t1", "amount": 1}, "junk", 7, None]})
        assert [t.id for t in store.get_transactions()] == ["t1"]

    def test_ephemeral_state_is_reset(self, store):
        """View and modal state never survive a re-init."""
        store.set_view("settings")
        store.open_modal(ModalType.EDIT_TRANSACTION, "abc")

        store.init({})

        state = store.get_state()
        assert state.current_view == View.DASHBOARD
        assert state.modal_open is None
        assert state.editing_transaction_id is None

    def test_init_notifies(self, store, recorder):
        store.subscribe(recorder)
        store.init({})
        assert recorder.calls == 2


class TestReadIsolation:
    """Callers can never change the store through a returned value."""

    def test_get_transactions_returns_copies(self, store):
        store.add_transaction(_expense())
        store.get_transactions()[0].amount = 999
        assert store.get_transactions()[0].amount == 40

    def test_get_categories_returns_a_copy(self, store):
        store.get_categories().append("Hacked")
        assert "Hacked" not in store.get_categories()

    def test_get_state_returns_a_copy(self, store):
        store.add_transaction(_expense())
        state = store.get_state()
        state.transactions.clear()
        state.categories.clear()
        state.currency = "XXX"
        assert len(store.get_transactions()) == 1
        assert store.get_categories() == list(DEFAULT_CATEGORIES)
        assert store.get_currency() == "NGN"

    def test_get_transaction(self, store):
        added = store.add_transaction(_expense())
        found = store.get_transaction(added.id)
        assert found == added
        found.amount = 1
        assert store.get_transaction(added.id).amount == 40

    def test_get_transaction_unknown_id(self, store):
        assert store.get_transaction("missing") is None

    def test_subscriber_cannot_mutate_state(self, store):
        store.subscribe(lambda state: state.categories.clear())
        store.add_category("Pets")
        assert "Pets" in store.get_categories()
        assert len(store.get_categories()) == 20


class TestCurrency:
    """Tests for set_currency."""

    def test_too_short_is_ignored(self, store, recorder):
        store.subscribe(recorder)
        store.set_currency("us")
        assert store.get_currency() == "NGN"
        assert recorder.calls == 1

    def test_non_string_is_ignored(self, store, recorder):
        store.subscribe(recorder)
        store.set_currency(None)
        store.set_currency(1234)
        assert store.get_currency() == "NGN"
        assert recorder.calls == 1

    def test_valid_code_is_upper_cased(self, store, recorder):
        store.subscribe(recorder)
        store.set_currency("usd")
        assert store.get_currency() == "USD"
        assert recorder.calls == 2


class TestTransactions:
    """Tests for adding, updating and deleting transactions."""

    def test_add_generates_id(self, store):
        added = store.add_transaction(_income())
        [stored] = store.get_transactions()
        assert stored.id == added.id
        assert stored.id
        assert stored.amount == 100

    def test_add_ignores_caller_id(self, store):
        added = store.add_transaction({**_income(), "id": "mine"})
        assert added.id != "mine"

    def test_add_ids_are_unique(self, store):
        ids = {store.add_transaction(_expense()).id for _ in range(50)}
        assert len(ids) == 50

    def test_add_coerces_amount(self, store):
        """amount '42.5' is stored as the number 42.5."""
        store.add_transaction({"amount": "42.5", "type": "expense", "category": "Fuel"})
        assert store.get_transactions()[0].amount == 42.5

    def test_add_and_update_coerce_oversized_amount(self, store):
        """An int too large for a float becomes 0 instead of raising."""
        added = store.add_transaction({"amount": 10 ** 400, "category": "Fuel"})
        assert added.amount == 0.0

        store.update_transaction(added.id, {"amount": 1})
        assert store.update_transaction(added.id, {"amount": 10 ** 400}) is True
        assert store.get_transaction(added.id).amount == 0.0

    def test_add_defaults_date_to_today(self, store):
        store.add_transaction({"amount": 5, "type": "expense", "category": "Fuel"})
        assert store.get_transactions()[0].date == today_iso()

    def test_add_accepts_a_transaction_model(self, store):
        added = store.add_transaction(Transaction(amount=3, category="Fuel", date="2025-01-01"))
        assert added.category == "Fuel"

    def test_add_does_not_validate_category(self, store):
        """Referential integrity is the caller's job."""
        store.add_transaction(_expense(category="Not A Category"))
        assert store.get_transactions()[0].category == "Not A Category"

    def test_balance_scenario(self, store):
        """100 income and 40 expense leave a balance of 60."""
        store.add_transaction(_income(100))
        store.add_transaction(_expense(40))
        assert calculate_totals(store.get_transactions()).balance == 60

    def test_update_merges_fields(self, store):
        added = store.add_transaction(_expense())
        assert store.update_transaction(added.id, {"description": "Weekly shop", "amount": "55"})

        updated = store.get_transaction(added.id)
        assert updated.description == "Weekly shop"
        assert updated.amount == 55.0
        assert updated.category == "Groceries"

    def test_update_falsy_amount_keeps_previous(self, store):
        added = store.add_transaction(_expense(40))
        store.update_transaction(added.id, {"amount": 0})
        store.update_transaction(added.id, {"amount": ""})
        store.update_transaction(added.id, {"category": "Fuel"})
        assert store.get_transaction(added.id).amount == 40

    def test_update_never_changes_id(self, store):
        added = store.add_transaction(_expense())
        store.update_transaction(added.id, {"id": "other"})
        assert store.get_transaction(added.id) is not None
        assert store.get_transaction("other") is None

    def test_update_unknown_id_is_a_silent_no_op(self, store, recorder):
        store.add_transaction(_expense())
        store.subscribe(recorder)

        assert store.update_transaction("missing", {"amount": 1}) is False
        assert recorder.calls == 1

    def test_delete(self, store):
        keep = store.add_transaction(_income())
        gone = store.add_transaction(_expense())
        store.delete_transaction(gone.id)
        assert [t.id for t in store.get_transactions()] == [keep.id]

    def test_delete_removes_every_match(self, store):
        store.init({"transactions": [
            {"id": "dup", "amount": 1},
            {"id": "dup", "amount": 2},
            {"id": "other", "amount": 3},
        ]})
        store.delete_transaction("dup")
        assert [t.id for t in store.get_transactions()] == ["other"]

    def test_delete_unknown_id_still_notifies(self, store, recorder):
        """Deleting a missing id leaves data alone but notifies."""
        store.add_transaction(_expense())
        before = [t.model_dump() for t in store.get_transactions()]
        store.subscribe(recorder)

        store.delete_transaction("missing")

        assert [t.model_dump() for t in store.get_transactions()] == before
        assert recorder.calls == 2


class TestCategories:
    """Tests for the category rules."""

    def test_add_trims(self, store):
        assert store.add_category("  Pets  ") is True
        assert store.get_categories()[-1] == "Pets"

    def test_add_rejects_empty_and_duplicates(self, store, recorder):
        store.subscribe(recorder)
        assert store.add_category("   ") is False
        assert store.add_category("Salary") is False
        assert store.add_category(None) is False
        assert recorder.calls == 1

    def test_add_is_case_sensitive(self, store):
        assert store.add_category("salary") is True
        assert "salary" in store.get_categories()

    @pytest.mark.parametrize("name", DEFAULT_CATEGORIES)
    def test_default_categories_are_never_removed(self, store, recorder, name):
        store.subscribe(recorder)
        assert store.remove_category(name) is False
        assert store.get_categories() == list(DEFAULT_CATEGORIES)
        assert recorder.calls == 1

    def test_default_protection_holds_when_loaded_without_defaults(self, store):
        """A default name is protected even if it isn't in the saved list."""
        store.init({"categories": ["Custom", "Rent"]})
        assert store.remove_category("Rent") is False
        assert store.get_categories() == ["Custom", "Rent"]

    def test_referenced_category_is_protected_until_unused(self, store):
        store.add_category("Pets")
        first = store.add_transaction(_expense(category="Pets"))
        second = store.add_transaction(_expense(category="Pets"))

        assert store.remove_category("Pets") is False
        store.delete_transaction(first.id)
        assert store.remove_category("Pets") is False
        store.delete_transaction(second.id)

        assert store.remove_category("Pets") is True
        assert "Pets" not in store.get_categories()

    def test_remove_trims_name(self, store):
        store.add_category("Pets")
        assert store.remove_category(" Pets ") is True
        assert "Pets" not in store.get_categories()

    def test_remove_notifies(self, store, recorder):
        store.add_category("Pets")
        store.subscribe(recorder)
        store.remove_category("Pets")
        assert recorder.calls == 2

    def test_is_default_category(self, store):
        assert store.is_default_category("Salary") is True
        assert store.is_default_category("Pets") is False


class TestViewAndModal:
    """Tests for the ephemeral UI state."""

    def test_set_view(self, store, recorder):
        store.subscribe(recorder)
        assert store.set_view("transactions") is True
        assert store.set_view(View.CATEGORIES) is True
        assert store.get_state().current_view == View.CATEGORIES
        assert recorder.calls == 3

    def test_unknown_view_is_ignored(self, store, recorder):
        store.subscribe(recorder)
        assert store.set_view("reports") is False
        assert store.set_view(None) is False
        assert store.get_state().current_view == View.DASHBOARD
        assert recorder.calls == 1

    def test_open_and_close_modal(self, store, recorder):
        store.subscribe(recorder)

        store.open_modal(ModalType.EDIT_TRANSACTION, "t1")
        state = store.get_state()
        assert state.modal_open == "editTransaction"
        assert state.editing_transaction_id == "t1"

        store.close_modal()
        state = store.get_state()
        assert state.modal_open is None
        assert state.editing_transaction_id is None
        assert recorder.calls == 3

    def test_open_modal_with_plain_name(self, store):
        store.open_modal("addTransaction")
        assert store.get_state().modal_open == ModalType.ADD_TRANSACTION.value
        assert store.get_state().editing_transaction_id is None

    def test_close_modal_always_notifies(self, store, recorder):
        store.subscribe(recorder)
        store.close_modal()
        assert recorder.calls == 2


class TestSubscriptions:
    """Tests for subscribe, unsubscribe and fan-out."""

    def test_replay_on_subscribe(self, store, recorder):
        """subscribe calls the callback once, immediately, with the current state."""
        store.set_currency("USD")
        store.subscribe(recorder)
        assert recorder.calls == 1
        assert recorder.states[0].currency == "USD"

    def test_subscribers_receive_full_state(self, store, recorder):
        store.subscribe(recorder)
        store.add_category("Pets")
        assert "Pets" in recorder.states[-1].categories
        assert recorder.states[-1].current_view == View.DASHBOARD

    def test_registration_order(self, store):
        calls = []
        store.subscribe(lambda s: calls.append("first"))
        store.subscribe(lambda s: calls.append("second"))
        calls.clear()

        store.add_category("Pets")

        assert calls == ["first", "second"]

    def test_unsubscribe(self, store, recorder):
        unsubscribe = store.subscribe(recorder)
        unsubscribe()
        store.add_category("Pets")
        assert recorder.calls == 1
        assert store.subscriber_count == 0

    def test_unsubscribe_is_idempotent(self, store, recorder):
        unsubscribe = store.subscribe(recorder)
        unsubscribe()
        unsubscribe()
        assert store.subscriber_count == 0

    def test_unsubscribe_removes_only_its_callback(self, store, recorder):
        other = []
        unsubscribe = store.subscribe(recorder)
        store.subscribe(other.append)

        unsubscribe()
        store.add_category("Pets")

        assert recorder.calls == 1
        assert len(other) == 2

    def test_non_callable_is_ignored(self, store):
        unsubscribe = store.subscribe("not a function")
        unsubscribe()
        assert store.subscriber_count == 0

    def test_failing_subscriber_is_isolated(self, store, recorder):
        """A subscriber that raises doesn't stop the others or the mutation."""
        def broken(state):
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.subscribe(recorder)

        with capture_logs() as logs:
            store.add_category("Pets")

        assert "Pets" in store.get_categories()
        assert recorder.calls == 2
        failures = [e for e in logs if e["event"] == "subscriber_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "error"

    def test_failing_subscriber_on_replay_is_isolated(self, store):
        def broken(state):
            raise RuntimeError("boom")

        with capture_logs() as logs:
            store.subscribe(broken)

        assert store.subscriber_count == 1
        assert any(e["event"] == "subscriber_failed" for e in logs)

    def test_unsubscribe_during_notification(self, store, recorder):
        """Removing a subscriber mid fan-out only affects later notifications."""
        unsubscribe_recorder = None

        def remover(state):
            if unsubscribe_recorder is not None:
                unsubscribe_recorder()

        store.subscribe(remover)
        unsubscribe_recorder = store.subscribe(recorder)

        store.add_category("Pets")
        assert recorder.calls == 2

        store.add_category("Plants")
        assert recorder.calls == 2
