"""Domain models for dashboard aggregates."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from pocketledger.domain.models.ledger import BillReminder, Movement


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""

    start: date
    end: date

    def contains(self, value: date) -> bool:
        """Return True when the date falls inside the range."""
        return self.start <= value <= self.end


@dataclass(frozen=True)
class PeriodTotals:
    """Income and expense totals for a period."""

    income: Decimal
    expense: Decimal

    @property
    def net(self) -> Decimal:
        """Return income minus expense."""
        return self.income - self.expense


@dataclass(frozen=True)
class CategoryExpense:
    """Expense total for a single category."""

    category_id: int
    category: str
    icon: str
    color: str
    amount: Decimal


@dataclass(frozen=True)
class MonthlyTrendPoint:
    """Income and expense totals for one calendar month."""

    label: str
    year: int
    month: int
    totals: PeriodTotals

    @property
    def income(self) -> Decimal:
        return self.totals.income

    @property
    def expense(self) -> Decimal:
        return self.totals.expense

    @property
    def net(self) -> Decimal:
        return self.totals.net


@dataclass(frozen=True)
class DashboardSummary:
    """Every dashboard statistic computed from one read snapshot.

    ``account_names`` and ``category_names`` resolve the identifiers carried
    by recent movements and upcoming bills, read in the same snapshot.
    """

    date_range: DateRange
    total_balance: Decimal
    period: PeriodTotals
    expenses_by_category: list[CategoryExpense]
    recent_movements: list[Movement]
    upcoming_bills: list[BillReminder]
    monthly_trend: list[MonthlyTrendPoint]
    account_names: dict[int, str] = field(default_factory=dict)
    category_names: dict[int, str] = field(default_factory=dict)

    def account_name(self, account_id: int | None) -> str:
        """Return the account name, or an empty string when unknown."""
        return self.account_names.get(account_id, "")

    def category_name(self, category_id: int) -> str:
        """Return the category name, or an empty string when unknown."""
        return self.category_names.get(category_id, "")


__all__ = [
    "DateRange",
    "PeriodTotals",
    "CategoryExpense",
    "MonthlyTrendPoint",
    "DashboardSummary",
]
