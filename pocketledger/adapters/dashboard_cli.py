"""CLI adapter printing the dashboard of one owner."""

from datetime import date
import os

from pocketledger.domain.errors import LedgerError
from pocketledger.domain.models import DashboardSummary
from pocketledger.infrastructure.container import build_aggregation_engine
from pocketledger.infrastructure.logging.logger import get_app_logger


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _parse_owner(value: str | None, logger) -> int | None:
    """Parse the owner id, logging an error when missing or invalid."""
    if not value or not value.strip():
        logger.error("LEDGER_OWNER_ID is required to print a dashboard.")
        return None
    try:
        return int(value)
    except ValueError:
        logger.error(f"Invalid LEDGER_OWNER_ID '{value}'.")
        return None


def _render(summary: DashboardSummary) -> None:
    period = summary.period
    print(
        f"Dashboard {summary.date_range.start} -> {summary.date_range.end}"
    )
    print(f"Total balance: {summary.total_balance:,.2f}")
    print(
        f"Income: {period.income:,.2f} | Expense: {period.expense:,.2f} | "
        f"Net: {period.net:+,.2f}"
    )
    print("Expenses by category:")
    for item in summary.expenses_by_category:
        print(f"  {item.icon} {item.category}: {item.amount:,.2f}")
    print("Recent movements:")
    for movement in summary.recent_movements:
        accounts = summary.account_name(movement.account_id)
        if movement.to_account_id is not None:
            accounts += f" -> {summary.account_name(movement.to_account_id)}"
        print(
            f"  {movement.movement_date} {movement.kind.value:<8} "
            f"{movement.amount:>12,.2f}  {movement.description} "
            f"[{summary.category_name(movement.category_id)} | {accounts}]"
        )
    print("Upcoming bills:")
    for bill in summary.upcoming_bills:
        print(
            f"  {bill.due_date} {bill.name}: {bill.amount:,.2f} "
            f"[{summary.category_name(bill.category_id)}]"
        )
    print("Monthly trend:")
    for point in summary.monthly_trend:
        print(
            f"  {point.label}: income={point.income:,.2f} "
            f"expense={point.expense:,.2f} net={point.net:+,.2f}"
        )


def main() -> None:
    """Compute and print the dashboard for LEDGER_OWNER_ID."""
    logger = get_app_logger()
    owner_id = _parse_owner(os.getenv("LEDGER_OWNER_ID"), logger)
    if owner_id is None:
        raise SystemExit(2)
    start_date = _parse_date(os.getenv("LEDGER_START_DATE"), logger)
    end_date = _parse_date(os.getenv("LEDGER_END_DATE"), logger)

    engine = build_aggregation_engine()
    try:
        summary = engine.dashboard(owner_id, start_date, end_date)
    except LedgerError as exc:
        logger.error(f"Dashboard failed for owner {owner_id}: {exc}")
        raise SystemExit(1) from exc
    _render(summary)


if __name__ == "__main__":  # pragma: no cover
    main()
