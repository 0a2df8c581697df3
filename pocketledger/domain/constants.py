"""Domain constants for the personal ledger."""

from enum import Enum


class MovementKind(str, Enum):
    """Kind of a recorded money movement."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class AccountKind(str, Enum):
    """Kind of an owned account."""

    CASH = "cash"
    DEBIT_CARD = "debit_card"
    CREDIT_CARD = "credit_card"
    SAVINGS = "savings"
    CHECKING = "checking"


class CategoryKind(str, Enum):
    """Movement kinds a category applies to."""

    INCOME = "income"
    EXPENSE = "expense"
    BOTH = "both"


class BillFrequency(str, Enum):
    """Recurrence of a bill reminder."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    YEARLY = "yearly"
    ONCE = "once"


DESCRIPTION_MAX_LENGTH = 255
NAME_MAX_LENGTH = 255
ICON_MAX_LENGTH = 10
COLOR_MAX_LENGTH = 7

DEFAULT_ACCOUNT_ICON = "🏦"

DEFAULT_PAGE_SIZE = 20
DEFAULT_RECENT_LIMIT = 10
DEFAULT_BILLS_HORIZON_DAYS = 30
DEFAULT_BILLS_LIMIT = 5
DEFAULT_TREND_MONTHS = 6


__all__ = [
    "MovementKind",
    "AccountKind",
    "CategoryKind",
    "BillFrequency",
    "DESCRIPTION_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "ICON_MAX_LENGTH",
    "COLOR_MAX_LENGTH",
    "DEFAULT_ACCOUNT_ICON",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_RECENT_LIMIT",
    "DEFAULT_BILLS_HORIZON_DAYS",
    "DEFAULT_BILLS_LIMIT",
    "DEFAULT_TREND_MONTHS",
]
