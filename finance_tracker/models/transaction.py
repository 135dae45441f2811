"""
Core Data Models for Finance Tracker

These models define the shapes that flow between the store, the
persistence gateway and the report builders.

DESIGN DECISION: Transactions are loosely typed on purpose.
Stored data may come from an older version of the app or a hand-edited
backup, so every field is coerced to something usable instead of being
rejected. Unknown fields are kept so a backup round-trips untouched.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from finance_tracker.utils.formatting import generate_id, today_iso


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_CURRENCY = "NGN"

DEFAULT_APP_VERSION = "1.0.0"

# Built-in categories. These are seeded on first run and can never be removed.
DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Groceries",
    "Dining Out",
    "Transport",
    "Fuel",
    "Rent",
    "Utilities",
    "Internet",
    "Phone",
    "Entertainment",
    "Shopping",
    "Healthcare",
    "Education",
    "Savings",
    "Investment",
    "Transfer",
    "Other Income",
    "Other Expense",
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction. The amount itself is always a magnitude."""
    INCOME = "income"
    EXPENSE = "expense"


class View(str, Enum):
    """Named pages of the app."""
    DASHBOARD = "dashboard"
    TRANSACTIONS = "transactions"
    CATEGORIES = "categories"
    SETTINGS = "settings"


class ModalType(str, Enum):
    """Named modals. `modal_open` holds one of these values or None."""
    ADD_TRANSACTION = "addTransaction"
    EDIT_TRANSACTION = "editTransaction"


def to_number(value: Any) -> float:
    """
    Coerce a loosely typed amount to a float.

    Numeric strings are parsed ("42.5" -> 42.5). Empty, unparseable or
    non-finite values become 0.0, including ints too large for a float.
    """
    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (ValueError, OverflowError):
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip() or 0)
        except ValueError:
            return 0.0
    else:
        return 0.0

    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


# =============================================================================
# TRANSACTION
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense entry.

    Category and type are soft references: nothing here checks that the
    category exists or that the type is a known TransactionType.
    """
    model_config = ConfigDict(extra="allow")

    id: str = Field(
        default_factory=generate_id,
        description="Opaque unique identifier"
    )
    amount: float = Field(
        default=0.0,
        description="Magnitude of the transaction; sign comes from `type`"
    )
    type: str = Field(
        default=TransactionType.EXPENSE.value,
        description="income or expense"
    )
    category: str = Field(
        default="",
        description="Category name"
    )
    description: Optional[str] = Field(
        default=None,
        description="Optional free text"
    )
    date: str = Field(
        default_factory=today_iso,
        description="Calendar date as YYYY-MM-DD"
    )

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> float:
        return to_number(v)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        if v is None or v == "":
            return generate_id()
        return str(v)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> str:
        if isinstance(v, Enum):
            return str(v.value)
        if v is None or v == "":
            return TransactionType.EXPENSE.value
        return str(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> str:
        """Accept date objects and default a missing date to today."""
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date):
            return v.isoformat()
        if v is None or v == "":
            return today_iso()
        return str(v)

    @property
    def month(self) -> str:
        """YYYY-MM prefix of the date."""
        return self.date[:7]

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME.value


# =============================================================================
# APPLICATION STATE
# =============================================================================

class PersistedData(BaseModel):
    """
    The persisted subset of the application state.

    CRITICAL: Only these three fields are ever written to storage.
    """

    currency: str = DEFAULT_CURRENCY
    transactions: list[Transaction] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Plain JSON-ready dict."""
        return self.model_dump(mode="json")


class ExportDocument(PersistedData):
    """Backup file contents: persisted data plus export metadata."""
    model_config = ConfigDict(populate_by_name=True)

    export_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="exportDate",
        description="When the export was generated (UTC)"
    )
    app_version: str = Field(
        default=DEFAULT_APP_VERSION,
        alias="appVersion",
        description="Static format version tag"
    )

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class AppState(BaseModel):
    """
    Everything the store holds.

    `current_view`, `modal_open` and `editing_transaction_id` are
    ephemeral: they are reset on every init and never persisted.
    """

    currency: str = DEFAULT_CURRENCY
    transactions: list[Transaction] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))

    # UI state (not persisted)
    current_view: View = View.DASHBOARD
    modal_open: Optional[str] = None
    editing_transaction_id: Optional[str] = None

    def persisted(self) -> PersistedData:
        """Copy of the persisted subset."""
        return PersistedData(
            currency=self.currency,
            transactions=[t.model_copy(deep=True) for t in self.transactions],
            categories=list(self.categories),
        )
