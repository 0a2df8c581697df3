"""Tests for the composition root."""

from unittest.mock import MagicMock

from pocketledger.application.use_cases.aggregation_engine import (
    AggregationEngine,
)
from pocketledger.application.use_cases.balance_mutator import BalanceMutator
from pocketledger.application.use_cases.query_movements import MovementQuery
from pocketledger.infrastructure import container
from pocketledger.infrastructure.ledger_store import SqlAlchemyLedgerStore
from pocketledger.infrastructure.settings import LedgerSettings


def test_build_ledger_store_wraps_database_port() -> None:
    """The store should be built on the supplied database port."""
    db_port = MagicMock()

    store = container.build_ledger_store(db_port=db_port)

    assert isinstance(store, SqlAlchemyLedgerStore)
    assert store._db_port is db_port


def test_build_balance_mutator_uses_given_store() -> None:
    store = MagicMock()

    mutator = container.build_balance_mutator(store)

    assert isinstance(mutator, BalanceMutator)
    assert mutator._ledger_store is store


def test_read_use_cases_follow_settings() -> None:
    """Dashboard and list defaults should come from LedgerSettings."""
    settings = LedgerSettings(
        db_url="sqlite://",
        page_size=7,
        recent_limit=3,
        bills_horizon_days=14,
        bills_limit=2,
        trend_months=12,
    )
    store = MagicMock()

    engine = container.build_aggregation_engine(store, settings=settings)
    query = container.build_movement_query(store, settings=settings)

    assert isinstance(engine, AggregationEngine)
    assert engine._recent_limit == 3
    assert engine._bills_horizon_days == 14
    assert engine._bills_limit == 2
    assert engine._trend_months == 12
    assert isinstance(query, MovementQuery)
    assert query._page_size == 7


def test_build_database_adapter_defers_engine_creation(monkeypatch) -> None:
    monkeypatch.setattr(
        container.SqlAlchemyDatabaseEngineAdapter,
        "get_ledger_engine",
        lambda self: "engine",
    )

    assert container.build_database_adapter().get_ledger_engine() == "engine"
