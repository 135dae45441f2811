"""
Formatting Helpers

Pure functions used across the app: currency and date display,
ISO dates for form defaults, id generation.

No dependencies on the rest of the package.
"""

import threading
from datetime import date, datetime
from functools import wraps
from typing import Any, Callable, Optional, Union
from uuid import uuid4


CURRENCY_SYMBOLS = {
    "NGN": "₦",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "GHS": "GH₵",
    "KES": "KSh",
    "ZAR": "R",
    "CAD": "CA$",
    "AUD": "A$",
}


def format_currency(amount: Any, currency: str = "USD") -> str:
    """
    Format a number as money, e.g. "$1,234.56" or "-₦500.00".

    Unknown currency codes are used as a prefix ("CHF 10.00").
    Anything that isn't a real number formats as "$0.00".
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return "$0.00"
    if amount != amount:  # NaN
        return "$0.00"

    code = (currency or "USD").upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date(value: Union[str, date, datetime, None]) -> str:
    """Format an ISO date string or date as "Dec 31, 2025". Returns "" if unparseable."""
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = date.fromisoformat(value[:10])
        except ValueError:
            return ""
    else:
        return ""

    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def today_iso(today: Optional[date] = None) -> str:
    """Today's date as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def first_day_of_month_iso(today: Optional[date] = None) -> str:
    """First day of the current month as YYYY-MM-DD."""
    return (today or date.today()).replace(day=1).isoformat()


def generate_id() -> str:
    """Generate an opaque unique id for a transaction."""
    return str(uuid4())


def capitalize(text: Any) -> str:
    """Upper-case the first letter, lower-case the rest."""
    if not isinstance(text, str) or not text:
        return ""
    return text[0].upper() + text[1:].lower()


def debounce(wait: float) -> Callable:
    """
    Decorator that delays calls until `wait` seconds have passed
    without another call. Only the last call's arguments are used.

    The wrapped function gains a `cancel()` attribute.
    """
    def decorator(func: Callable) -> Callable:
        timer: Optional[threading.Timer] = None
        lock = threading.Lock()

        @wraps(func)
        def debounced(*args, **kwargs) -> None:
            nonlocal timer
            with lock:
                if timer is not None:
                    timer.cancel()
                timer = threading.Timer(wait, func, args=args, kwargs=kwargs)
                timer.daemon = True
                timer.start()

        def cancel() -> None:
            nonlocal timer
            with lock:
                if timer is not None:
                    timer.cancel()
                    timer = None

        debounced.cancel = cancel
        return debounced

    return decorator
