"""
Data Models Package

Pydantic models shared by the store, the persistence gateway and reports.
"""

from finance_tracker.models.transaction import (
    DEFAULT_APP_VERSION,
    DEFAULT_CATEGORIES,
    DEFAULT_CURRENCY,
    AppState,
    ExportDocument,
    ModalType,
    PersistedData,
    Transaction,
    TransactionType,
    View,
    to_number,
)

__all__ = [
    # Constants
    "DEFAULT_APP_VERSION",
    "DEFAULT_CATEGORIES",
    "DEFAULT_CURRENCY",
    # Models
    "AppState",
    "ExportDocument",
    "PersistedData",
    "Transaction",
    # Enums
    "ModalType",
    "TransactionType",
    "View",
    # Helpers
    "to_number",
]
