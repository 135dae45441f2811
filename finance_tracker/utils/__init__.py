"""Formatting and small helper functions shared by every layer."""

from finance_tracker.utils.formatting import (
    capitalize,
    debounce,
    first_day_of_month_iso,
    format_currency,
    format_date,
    generate_id,
    today_iso,
)

__all__ = [
    "capitalize",
    "debounce",
    "first_day_of_month_iso",
    "format_currency",
    "format_date",
    "generate_id",
    "today_iso",
]
