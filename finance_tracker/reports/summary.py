"""
Balance Summaries

Totals for the transactions page and the dashboard cards, plus the
orderings the list views use.
"""

from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel

from finance_tracker.models.transaction import Transaction


class Totals(BaseModel):
    """All-time totals."""
    income: float = 0.0
    expenses: float = 0.0
    balance: float = 0.0


class DashboardSummary(BaseModel):
    """Current month income/expenses and the all-time balance."""
    month: str
    month_income: float = 0.0
    month_expenses: float = 0.0
    total_balance: float = 0.0


def calculate_totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum income and expenses. Anything that isn't income counts as an expense."""
    income = 0.0
    expenses = 0.0
    for t in transactions:
        if t.is_income:
            income += t.amount
        else:
            expenses += t.amount

    return Totals(income=income, expenses=expenses, balance=income - expenses)


def dashboard_summary(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> DashboardSummary:
    current_month = (today or date.today()).strftime("%Y-%m")

    transactions = list(transactions)
    month_totals = calculate_totals(t for t in transactions if t.month == current_month)
    all_time = calculate_totals(transactions)

    return DashboardSummary(
        month=current_month,
        month_income=month_totals.income,
        month_expenses=month_totals.expenses,
        total_balance=all_time.balance,
    )


def sort_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Newest first. Transactions on the same day keep their insertion order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def sort_categories(categories: Iterable[str]) -> list[str]:
    """Alphabetical, ignoring case."""
    return sorted(categories, key=str.casefold)
