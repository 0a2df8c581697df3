"""Domain models package."""

from .dashboard import (
    CategoryExpense,
    DashboardSummary,
    DateRange,
    MonthlyTrendPoint,
    PeriodTotals,
)
from .inputs import (
    AccountInput,
    BillReminderInput,
    CategoryInput,
    MovementInput,
)
from .ledger import (
    Account,
    AccountData,
    AccountDraft,
    BillReminder,
    BillReminderData,
    BillReminderDraft,
    Category,
    CategoryData,
    CategoryDraft,
    Movement,
    MovementData,
    MovementDraft,
)
from .query import (
    AccountDrift,
    MovementFilters,
    MovementPage,
    ReconciliationReport,
)

__all__ = [
    "Account",
    "AccountData",
    "AccountDraft",
    "BillReminder",
    "BillReminderData",
    "BillReminderDraft",
    "Category",
    "CategoryData",
    "CategoryDraft",
    "Movement",
    "MovementData",
    "MovementDraft",
    "CategoryExpense",
    "DashboardSummary",
    "DateRange",
    "MonthlyTrendPoint",
    "PeriodTotals",
    "AccountInput",
    "BillReminderInput",
    "CategoryInput",
    "MovementInput",
    "AccountDrift",
    "MovementFilters",
    "MovementPage",
    "ReconciliationReport",
]
