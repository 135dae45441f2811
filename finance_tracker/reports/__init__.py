"""
Reports Package

Read-only projections of the store's transactions: totals, chart series
and insights. Nothing here mutates state.
"""

from finance_tracker.reports.charts import (
    TrendSeries,
    aggregate_by_month,
    category_breakdown,
    last_n_months,
    month_label,
    monthly_trend,
)
from finance_tracker.reports.insights import category_totals, generate_insights
from finance_tracker.reports.summary import (
    DashboardSummary,
    Totals,
    calculate_totals,
    dashboard_summary,
    sort_categories,
    sort_transactions,
)

__all__ = [
    # Charts
    "TrendSeries",
    "aggregate_by_month",
    "category_breakdown",
    "last_n_months",
    "month_label",
    "monthly_trend",
    # Insights
    "category_totals",
    "generate_insights",
    # Summaries
    "DashboardSummary",
    "Totals",
    "calculate_totals",
    "dashboard_summary",
    "sort_categories",
    "sort_transactions",
]
