"""
Chart Data

Builds the series behind the two dashboard charts:
1. Spending breakdown by category for the current month (doughnut)
2. Income vs expenses over the last six months (bar)

Rendering is left to the UI. These functions only aggregate.
"""

from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from finance_tracker.models.transaction import Transaction, TransactionType


# Categories shown individually in the breakdown; the rest become "Other"
MAX_BREAKDOWN_CATEGORIES = 7

OTHER_LABEL = "Other"


class TrendSeries(BaseModel):
    """Income and expense totals per month, oldest month first."""
    months: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    income: list[float] = Field(default_factory=list)
    expenses: list[float] = Field(default_factory=list)


def last_n_months(n: int, today: Optional[date] = None) -> list[str]:
    """The last n months as YYYY-MM, oldest first, including the current one."""
    today = today or date.today()
    months = []
    for offset in range(n - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - offset
        year, month = divmod(index, 12)
        months.append(f"{year}-{month + 1:02d}")
    return months


def aggregate_by_month(transactions: Iterable[Transaction]) -> dict[str, dict[str, float]]:
    """Totals keyed by type, then by YYYY-MM."""
    monthly: dict[str, dict[str, float]] = {
        TransactionType.INCOME.value: {},
        TransactionType.EXPENSE.value: {},
    }
    for t in transactions:
        bucket = monthly.setdefault(t.type, {})
        bucket[t.month] = bucket.get(t.month, 0.0) + t.amount
    return monthly


def category_breakdown(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> dict[str, float]:
    """
    Current month expense totals by category, largest first.

    With more than seven categories, the top seven are kept and the rest
    are summed into "Other".
    """
    current_month = (today or date.today()).strftime("%Y-%m")

    totals: dict[str, float] = {}
    for t in transactions:
        if t.type == TransactionType.EXPENSE.value and t.month == current_month:
            totals[t.category] = totals.get(t.category, 0.0) + t.amount

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    if len(ranked) <= MAX_BREAKDOWN_CATEGORIES:
        return dict(ranked)

    result = dict(ranked[:MAX_BREAKDOWN_CATEGORIES])
    other = sum(amount for _, amount in ranked[MAX_BREAKDOWN_CATEGORIES:])
    if other > 0:
        result[OTHER_LABEL] = result.get(OTHER_LABEL, 0.0) + other
    return result


def month_label(year_month: str, today: Optional[date] = None) -> str:
    """'2025-03' -> 'Mar', or 'Mar 2024' when the year isn't the current one."""
    today = today or date.today()
    year, month = (int(part) for part in year_month.split("-"))
    label = date(year, month, 1).strftime("%b")
    if year != today.year:
        label = f"{label} {year}"
    return label


def monthly_trend(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
    months: int = 6,
) -> TrendSeries:
    today = today or date.today()
    monthly = aggregate_by_month(transactions)
    window = last_n_months(months, today)

    income = monthly[TransactionType.INCOME.value]
    expense = monthly[TransactionType.EXPENSE.value]

    return TrendSeries(
        months=window,
        labels=[month_label(m, today) for m in window],
        income=[income.get(m, 0.0) for m in window],
        expenses=[expense.get(m, 0.0) for m in window],
    )
