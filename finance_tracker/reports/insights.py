"""
Rule-Based Insights

Short plain-language observations for the dashboard, computed from the
current and previous month. Deterministic: same transactions and same
`today` always give the same insights.

Rules, in order:
1. Biggest expense category this month, and the top three
2. Month-over-month change in total spending (only if > 10%)
3. Categories that grew by more than 50% since last month
4. Savings rate
At most four insights are returned.
"""

import math
from datetime import date
from typing import Iterable, Optional

from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.reports.charts import last_n_months
from finance_tracker.utils.formatting import capitalize


MAX_INSIGHTS = 4

# Minimum month-over-month change worth mentioning, in percent
SIGNIFICANT_CHANGE_PCT = 10

# A category is flagged when it grows past this multiple of last month
CATEGORY_GROWTH_FACTOR = 1.5

EMPTY_MESSAGE = "Start adding transactions to get personalized insights."
CONSISTENT_MESSAGE = "Your spending looks consistent this month."


def _round(value: float) -> int:
    """Round half up."""
    return math.floor(value + 0.5)


def category_totals(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType = TransactionType.EXPENSE,
) -> dict[str, float]:
    totals: dict[str, float] = {}
    for t in transactions:
        if t.type == transaction_type.value:
            totals[t.category] = totals.get(t.category, 0.0) + t.amount
    return totals


def generate_insights(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> list[str]:
    transactions = list(transactions)
    if not transactions:
        return [EMPTY_MESSAGE]

    previous, current = last_n_months(2, today)
    current_tx = [t for t in transactions if t.month == current]
    previous_tx = [t for t in transactions if t.month == previous]

    current_expenses = category_totals(current_tx)
    previous_expenses = category_totals(previous_tx)
    current_total = sum(current_expenses.values())
    previous_total = sum(previous_expenses.values())

    insights: list[str] = []

    # Top spending categories
    if current_total > 0:
        ranked = sorted(current_expenses.items(), key=lambda item: item[1], reverse=True)[:3]
        top, top_amount = ranked[0]
        share = _round(top_amount / current_total * 100)
        insights.append(
            f"Your biggest expense this month is {capitalize(top)} ({share}% of total spending)."
        )
        if len(ranked) > 1:
            names = ", ".join(capitalize(name) for name, _ in ranked)
            insights.append(f"Top spending categories: {names}.")

    # Month-over-month change
    if previous_total > 0 and current_total > 0:
        change = (current_total - previous_total) / previous_total * 100
        if abs(change) > SIGNIFICANT_CHANGE_PCT:
            direction = "increased" if change > 0 else "decreased"
            insights.append(
                f"Your total spending {direction} by {_round(abs(change))}% compared to last month."
            )
    elif previous_total == 0 and current_total > 0:
        insights.append("You started tracking expenses this month. Great job!")

    # Fast-growing categories
    for category, amount in current_expenses.items():
        before = previous_expenses.get(category, 0.0)
        if before > 0 and amount > before * CATEGORY_GROWTH_FACTOR:
            increase = _round((amount - before) / before * 100)
            insights.append(f"You spent {increase}% more on {capitalize(category)} this month.")

    # Savings rate
    income = sum(category_totals(current_tx, TransactionType.INCOME).values())
    if income > 0:
        rate = _round((income - current_total) / income * 100)
        if rate > 0:
            insights.append(f"Your savings rate this month is {rate}%. Keep it up!")
        elif rate < 0:
            insights.append(
                "You spent more than you earned this month. Consider reviewing your budget."
            )

    if not insights:
        insights.append(CONSISTENT_MESSAGE)

    return insights[:MAX_INSIGHTS]
