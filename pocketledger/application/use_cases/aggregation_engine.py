"""Use case computing dashboard statistics for one owner."""

from collections.abc import Callable
from datetime import date, timedelta
from decimal import Decimal

from pocketledger.application.ports.ledger_store import (
    LedgerReaderPort,
    LedgerStorePort,
)
from pocketledger.domain.constants import (
    DEFAULT_BILLS_HORIZON_DAYS,
    DEFAULT_BILLS_LIMIT,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_TREND_MONTHS,
    MovementKind,
)
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.models import (
    BillReminder,
    CategoryExpense,
    DashboardSummary,
    DateRange,
    Movement,
    MonthlyTrendPoint,
    PeriodTotals,
)
from pocketledger.domain.services import (
    last_months,
    month_label,
    month_range,
    resolve_date_range,
)
from pocketledger.infrastructure.logging.logger import get_app_logger


def _require_positive(name: str, value: int | None, default: int) -> int:
    resolved = default if value is None else value
    if resolved <= 0:
        raise ValidationError({name: "Must be a positive integer."})
    return resolved


class AggregationEngine:
    """Read-only dashboard statistics.

    Every public method opens one read snapshot, so the numbers it returns
    never mix states from before and after a concurrent mutation.
    """

    def __init__(
        self,
        ledger_store: LedgerStorePort,
        logger=None,
        today: Callable[[], date] | None = None,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        bills_horizon_days: int = DEFAULT_BILLS_HORIZON_DAYS,
        bills_limit: int = DEFAULT_BILLS_LIMIT,
        trend_months: int = DEFAULT_TREND_MONTHS,
    ) -> None:
        """Initialize the engine.

        Args:
            ledger_store: Port handing out read snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
            today: Optional callable returning the reference date.
            recent_limit: Default number of recent movements.
            bills_horizon_days: Default look-ahead for upcoming bills.
            bills_limit: Default number of upcoming bills.
            trend_months: Default number of months in the trend.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()
        self._today = today or date.today
        self._recent_limit = recent_limit
        self._bills_horizon_days = bills_horizon_days
        self._bills_limit = bills_limit
        self._trend_months = trend_months

    def total_balance(self, owner_id: int) -> Decimal:
        """Return the sum of the owner's account balances."""
        with self._ledger_store.snapshot() as reader:
            return reader.sum_balances(owner_id)

    def period_income(
        self,
        owner_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Decimal:
        """Return total income in the range (default: current month)."""
        return self.period_totals(owner_id, start_date, end_date).income

    def period_expense(
        self,
        owner_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Decimal:
        """Return total expense in the range (default: current month)."""
        return self.period_totals(owner_id, start_date, end_date).expense

    def period_totals(
        self,
        owner_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> PeriodTotals:
        """Return income, expense and net for an inclusive date range.

        Args:
            owner_id: Owner whose movements are summed.
            start_date: Optional lower bound; defaults to the month start.
            end_date: Optional upper bound; defaults to the month end.

        Returns:
            PeriodTotals: Totals for the resolved range.

        Raises:
            ValidationError: If the start date is after the end date.
        """
        date_range = resolve_date_range(start_date, end_date, self._today())
        with self._ledger_store.snapshot() as reader:
            return self._period_totals(reader, owner_id, date_range)

    def expense_by_category(
        self,
        owner_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[CategoryExpense]:
        """Return expense totals grouped by category id, ordered by id."""
        date_range = resolve_date_range(start_date, end_date, self._today())
        with self._ledger_store.snapshot() as reader:
            return reader.expense_totals_by_category(
                owner_id, date_range.start, date_range.end
            )

    def recent_movements(
        self,
        owner_id: int,
        limit: int | None = None,
    ) -> list[Movement]:
        """Return the newest movements, date desc then created_at desc."""
        resolved = _require_positive("limit", limit, self._recent_limit)
        with self._ledger_store.snapshot() as reader:
            return reader.recent_movements(owner_id, resolved)

    def upcoming_bills(
        self,
        owner_id: int,
        horizon_days: int | None = None,
        limit: int | None = None,
    ) -> list[BillReminder]:
        """Return unpaid bills due between today and the horizon, inclusive."""
        with self._ledger_store.snapshot() as reader:
            return self._upcoming_bills(reader, owner_id, horizon_days, limit)

    def monthly_trend(
        self,
        owner_id: int,
        months: int | None = None,
    ) -> list[MonthlyTrendPoint]:
        """Return per-month totals for the last months, oldest first."""
        with self._ledger_store.snapshot() as reader:
            return self._monthly_trend(reader, owner_id, months)

    def dashboard(
        self,
        owner_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> DashboardSummary:
        """Compute every dashboard statistic from one snapshot.

        Args:
            owner_id: Owner whose ledger is summarized.
            start_date: Optional lower bound for the period statistics.
            end_date: Optional upper bound for the period statistics.

        Returns:
            DashboardSummary: Balance, period totals, category breakdown,
            recent activity, upcoming bills and monthly trend.

        Raises:
            ValidationError: If the start date is after the end date.
        """
        date_range = resolve_date_range(start_date, end_date, self._today())
        with self._ledger_store.snapshot() as reader:
            summary = DashboardSummary(
                date_range=date_range,
                total_balance=reader.sum_balances(owner_id),
                period=self._period_totals(reader, owner_id, date_range),
                expenses_by_category=reader.expense_totals_by_category(
                    owner_id, date_range.start, date_range.end
                ),
                recent_movements=reader.recent_movements(
                    owner_id, self._recent_limit
                ),
                upcoming_bills=self._upcoming_bills(reader, owner_id),
                monthly_trend=self._monthly_trend(reader, owner_id),
                account_names={
                    account.id: account.name
                    for account in reader.list_accounts(owner_id)
                },
                category_names={
                    category.id: category.name
                    for category in reader.list_categories()
                },
            )
        self._logger.info(
            f"Dashboard computed for owner {owner_id} "
            f"({date_range.start} to {date_range.end}): "
            f"balance={summary.total_balance}, net={summary.period.net}"
        )
        return summary

    @staticmethod
    def _period_totals(
        reader: LedgerReaderPort,
        owner_id: int,
        date_range: DateRange,
    ) -> PeriodTotals:
        return PeriodTotals(
            income=reader.sum_movements(
                owner_id, MovementKind.INCOME, date_range.start, date_range.end
            ),
            expense=reader.sum_movements(
                owner_id, MovementKind.EXPENSE, date_range.start, date_range.end
            ),
        )

    def _upcoming_bills(
        self,
        reader: LedgerReaderPort,
        owner_id: int,
        horizon_days: int | None = None,
        limit: int | None = None,
    ) -> list[BillReminder]:
        horizon = self._bills_horizon_days
        if horizon_days is not None:
            horizon = horizon_days
        if horizon < 0:
            raise ValidationError({"horizon_days": "Must not be negative."})
        resolved_limit = _require_positive("limit", limit, self._bills_limit)
        today = self._today()
        return reader.upcoming_bills(
            owner_id, today, today + timedelta(days=horizon), resolved_limit
        )

    def _monthly_trend(
        self,
        reader: LedgerReaderPort,
        owner_id: int,
        months: int | None = None,
    ) -> list[MonthlyTrendPoint]:
        count = _require_positive("months", months, self._trend_months)
        points: list[MonthlyTrendPoint] = []
        for year, month in last_months(self._today(), count):
            points.append(
                MonthlyTrendPoint(
                    label=month_label(year, month),
                    year=year,
                    month=month,
                    totals=self._period_totals(
                        reader, owner_id, month_range(year, month)
                    ),
                )
            )
        return points


__all__ = ["AggregationEngine"]
