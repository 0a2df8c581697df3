"""Composition root for wiring infrastructure adapters."""

from pocketledger.application.ports.database import DatabaseEnginePort
from pocketledger.application.ports.ledger_store import LedgerStorePort
from pocketledger.application.use_cases.aggregation_engine import (
    AggregationEngine,
)
from pocketledger.application.use_cases.balance_mutator import BalanceMutator
from pocketledger.application.use_cases.manage_accounts import (
    ManageAccountsUseCase,
)
from pocketledger.application.use_cases.manage_reference_data import (
    ManageReferenceDataUseCase,
)
from pocketledger.application.use_cases.query_movements import MovementQuery
from pocketledger.application.use_cases.reconcile_balances import (
    ReconcileBalancesUseCase,
)
from pocketledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from pocketledger.infrastructure.ledger_store import SqlAlchemyLedgerStore
from pocketledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from pocketledger.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_store(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerStorePort:
    """Return the SQLAlchemy ledger store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerStore(resolved_db, logger=get_app_logger())


def build_balance_mutator(
    ledger_store: LedgerStorePort | None = None,
) -> BalanceMutator:
    """Return the balance mutator bound to the ledger store."""
    return BalanceMutator(
        ledger_store or build_ledger_store(),
        logger=get_app_logger(),
        usage_logger=get_usage_logger(),
    )


def build_aggregation_engine(
    ledger_store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> AggregationEngine:
    """Return the dashboard engine configured from settings."""
    resolved = settings or LedgerSettings.from_env()
    return AggregationEngine(
        ledger_store or build_ledger_store(),
        logger=get_app_logger(),
        recent_limit=resolved.recent_limit,
        bills_horizon_days=resolved.bills_horizon_days,
        bills_limit=resolved.bills_limit,
        trend_months=resolved.trend_months,
    )


def build_movement_query(
    ledger_store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> MovementQuery:
    """Return the movement list query configured from settings."""
    resolved = settings or LedgerSettings.from_env()
    return MovementQuery(
        ledger_store or build_ledger_store(),
        logger=get_app_logger(),
        page_size=resolved.page_size,
    )


def build_manage_accounts(
    ledger_store: LedgerStorePort | None = None,
) -> ManageAccountsUseCase:
    """Return the account management use case."""
    return ManageAccountsUseCase(
        ledger_store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_manage_reference_data(
    ledger_store: LedgerStorePort | None = None,
) -> ManageReferenceDataUseCase:
    """Return the category and bill reminder use case."""
    return ManageReferenceDataUseCase(
        ledger_store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_reconcile_balances(
    ledger_store: LedgerStorePort | None = None,
) -> ReconcileBalancesUseCase:
    """Return the balance reconciliation use case."""
    return ReconcileBalancesUseCase(
        ledger_store or build_ledger_store(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_store",
    "build_balance_mutator",
    "build_aggregation_engine",
    "build_movement_query",
    "build_manage_accounts",
    "build_manage_reference_data",
    "build_reconcile_balances",
]
