"""
Streamlit Frontend for Finance Tracker

A thin UI over the store. Every page reads copies from the store and
every button calls a store mutation; saving happens through the
persistence subscriber, never from here.

Pages:
1. Dashboard - month summary, charts, insights
2. Transactions - add, edit, delete
3. Categories - add and remove custom categories
4. Settings - currency, export, import, clear
"""

from datetime import date

import streamlit as st

from finance_tracker.audit import configure_logging
from finance_tracker.config import get_settings
from finance_tracker.models import ModalType, TransactionType, View
from finance_tracker.orchestrator import create_app_components
from finance_tracker.reports import (
    calculate_totals,
    category_breakdown,
    dashboard_summary,
    generate_insights,
    monthly_trend,
    sort_categories,
    sort_transactions,
)
from finance_tracker.services import PersistenceGateway
from finance_tracker.store import Store
from finance_tracker.utils import capitalize, format_currency, format_date


# Page configuration
st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

PAGES = {
    "📊 Dashboard": View.DASHBOARD,
    "💸 Transactions": View.TRANSACTIONS,
    "🏷️ Categories": View.CATEGORIES,
    "⚙️ Settings": View.SETTINGS,
}

CURRENCIES = ["NGN", "USD", "EUR", "GBP", "INR", "GHS", "KES", "ZAR", "CAD", "AUD", "JPY"]


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return date.today()


@st.cache_resource
def get_components():
    """Get or create the store and gateway (cached)."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    return create_app_components(settings)


def main():
    """Main application entry point."""
    store, gateway = get_components()

    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio("Navigate to:", list(PAGES), index=0)
    view = PAGES[page]
    if store.get_state().current_view != view:
        store.set_view(view)

    if view == View.DASHBOARD:
        render_dashboard_page(store)
    elif view == View.TRANSACTIONS:
        render_transactions_page(store)
    elif view == View.CATEGORIES:
        render_categories_page(store)
    elif view == View.SETTINGS:
        render_settings_page(store, gateway)


def render_dashboard_page(store: Store):
    """Render the dashboard."""
    st.title("📊 Dashboard")

    transactions = store.get_transactions()
    currency = store.get_currency()
    today = date.today()

    summary = dashboard_summary(transactions, today)
    col1, col2, col3 = st.columns(3)
    col1.metric("Income this month", format_currency(summary.month_income, currency))
    col2.metric("Expenses this month", format_currency(summary.month_expenses, currency))
    col3.metric("Current balance", format_currency(summary.total_balance, currency))

    st.markdown("---")
    left, right = st.columns(2)

    with left:
        st.subheader("Spending by category")
        breakdown = category_breakdown(transactions, today)
        if breakdown:
            st.bar_chart(
                {
                    "Category": [capitalize(name) for name in breakdown],
                    "Amount": list(breakdown.values()),
                },
                x="Category",
                y="Amount",
            )
        else:
            st.info("No expenses yet this month.")

    with right:
        st.subheader("Income vs expenses")
        trend = monthly_trend(transactions, today)
        st.bar_chart(
            {
                "Month": trend.months,
                "Income": trend.income,
                "Expenses": trend.expenses,
            },
            x="Month",
            y=["Income", "Expenses"],
        )

    st.subheader("💡 Insights")
    for insight in generate_insights(transactions, today):
        st.markdown(f"- {insight}")


def render_transactions_page(store: Store):
    """Render the transactions page."""
    st.title("💸 Transactions")

    state = store.get_state()
    currency = state.currency
    editing = (
        store.get_transaction(state.editing_transaction_id)
        if state.modal_open == ModalType.EDIT_TRANSACTION.value
        else None
    )

    totals = calculate_totals(state.transactions)
    col1, col2, col3 = st.columns(3)
    col1.metric("Total income", format_currency(totals.income, currency))
    col2.metric("Total expenses", format_currency(totals.expenses, currency))
    col3.metric("Current balance", format_currency(totals.balance, currency))

    categories = sort_categories(state.categories)

    st.subheader("Edit transaction" if editing else "Add transaction")
    with st.form("transaction_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input(
                "Amount *",
                value=float(editing.amount) if editing else 0.0,
                min_value=0.0,
                step=0.01,
                format="%.2f",
            )
            tx_type = st.radio(
                "Type",
                [TransactionType.EXPENSE.value, TransactionType.INCOME.value],
                index=1 if editing and editing.is_income else 0,
                format_func=capitalize,
                horizontal=True,
            )
        with col2:
            category = st.selectbox(
                "Category",
                categories,
                index=categories.index(editing.category)
                if editing and editing.category in categories
                else 0,
            )
            tx_date = st.date_input(
                "Date",
                value=_parse_date(editing.date) if editing else date.today(),
            )
        description = st.text_input(
            "Description (optional)",
            value=(editing.description or "") if editing else "",
        )

        submitted = st.form_submit_button("💾 Save", type="primary")

    if submitted:
        if amount <= 0:
            st.error("Please enter a valid amount.")
        else:
            data = {
                "amount": abs(amount),
                "type": tx_type,
                "category": category,
                "description": description.strip(),
                "date": tx_date.isoformat(),
            }
            if editing:
                store.update_transaction(editing.id, data)
                store.close_modal()
            else:
                store.add_transaction(data)
            st.rerun()

    if editing and st.button("Cancel edit"):
        store.close_modal()
        st.rerun()

    st.markdown("---")
    transactions = sort_transactions(state.transactions)
    if not transactions:
        st.info("No transactions yet. Add your first one above.")
        return

    for t in transactions:
        sign = "+" if t.is_income else "-"
        col1, col2, col3, col4 = st.columns([4, 2, 1, 1])
        with col1:
            st.markdown(f"**{capitalize(t.category)}**  \n{t.description or 'No description'}")
            st.caption(format_date(t.date))
        col2.markdown(f"**{sign}{format_currency(t.amount, currency)}**")
        if col3.button("Edit", key=f"edit_{t.id}"):
            store.open_modal(ModalType.EDIT_TRANSACTION, t.id)
            st.rerun()
        if col4.button("Delete", key=f"delete_{t.id}"):
            store.delete_transaction(t.id)
            st.rerun()


def render_categories_page(store: Store):
    """Render the categories page."""
    st.title("🏷️ Categories")

    with st.form("category_form", clear_on_submit=True):
        name = st.text_input("New category")
        submitted = st.form_submit_button("➕ Add")

    if submitted:
        if not name.strip():
            st.warning("Please enter a category name.")
        elif name.strip() in store.get_categories():
            st.warning("Category already exists.")
        else:
            store.add_category(name)
            st.rerun()

    categories = sort_categories(store.get_categories())
    if not categories:
        st.info("No categories yet.")
        return

    for category in categories:
        col1, col2 = st.columns([5, 1])
        col1.markdown(capitalize(category))
        if store.is_default_category(category):
            continue
        if col2.button("Remove", key=f"remove_{category}"):
            if store.remove_category(category):
                st.rerun()
            else:
                st.error("Cannot remove default categories or categories in use.")


def render_settings_page(store: Store, gateway: PersistenceGateway):
    """Render the settings page."""
    st.title("⚙️ Settings")

    current = store.get_currency()
    options = CURRENCIES if current in CURRENCIES else [current, *CURRENCIES]
    currency = st.selectbox("Currency", options, index=options.index(current))
    if currency != current:
        store.set_currency(currency)
        st.success(f"Currency updated to {currency}!")

    st.markdown("---")
    st.subheader("Backup")
    st.download_button(
        "📥 Export data",
        data=gateway.export_data(),
        file_name=gateway.backup_filename(),
        mime="application/json",
    )

    uploaded = st.file_uploader("Import a backup", type=["json"])
    if uploaded and st.button("📤 Import"):
        if gateway.import_json(uploaded.getvalue()):
            st.success("Import successful!")
            st.rerun()
        else:
            st.error("Invalid file.")

    st.markdown("---")
    st.subheader("Danger zone")
    confirm = st.checkbox("I understand this deletes ALL data permanently")
    if st.button("🗑️ Clear all data", disabled=not confirm):
        gateway.clear_all()
        st.success("Data cleared.")
        st.rerun()


if __name__ == "__main__":
    main()
