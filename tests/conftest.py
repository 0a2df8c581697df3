"""Shared fixtures: a ledger on a temporary SQLite file."""

from datetime import date, datetime, timedelta
from decimal import Decimal
import itertools
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

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
from pocketledger.domain.models import (
    AccountDraft,
    CategoryDraft,
    MovementDraft,
)
from pocketledger.infrastructure.db import (
    SqlAlchemyDatabaseEngineAdapter,
    _create_engine,
)
from pocketledger.infrastructure.ledger_store import SqlAlchemyLedgerStore
from pocketledger.infrastructure.locking import OwnerLockRegistry
from pocketledger.infrastructure.schema import create_schema

OWNER = 1
OTHER_OWNER = 2
TODAY = date(2024, 1, 20)


@pytest.fixture
def engine(tmp_path):
    """SQLite engine on a fresh database file with the schema created."""
    sqlite_engine = _create_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    create_schema(sqlite_engine)
    yield sqlite_engine
    sqlite_engine.dispose()


@pytest.fixture
def store(engine):
    return SqlAlchemyLedgerStore(
        SqlAlchemyDatabaseEngineAdapter(engine),
        lock_registry=OwnerLockRegistry(),
        logger=MagicMock(),
    )


@pytest.fixture
def clock():
    """Strictly increasing creation timestamps."""
    ticks = itertools.count()
    start = datetime(2024, 1, 1, 9, 0, 0)
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def mutator(store, clock):
    return BalanceMutator(
        store,
        logger=MagicMock(),
        usage_logger=MagicMock(),
        clock=clock,
    )


@pytest.fixture
def aggregation(store):
    return AggregationEngine(store, logger=MagicMock(), today=lambda: TODAY)


@pytest.fixture
def query(store):
    return MovementQuery(store, logger=MagicMock())


@pytest.fixture
def ledger(store):
    """One category, two accounts of OWNER and one account of OTHER_OWNER."""
    accounts = ManageAccountsUseCase(store, logger=MagicMock())
    reference = ManageReferenceDataUseCase(store, logger=MagicMock())
    category = reference.add_category(
        CategoryDraft(name="General", icon="*", color="#888888", kind="both")
    )
    x = accounts.open_account(
        OWNER,
        AccountDraft(name="X", kind="checking", opening_balance="1000.00"),
    )
    y = accounts.open_account(
        OWNER,
        AccountDraft(name="Y", kind="savings", opening_balance="0.00"),
    )
    foreign = accounts.open_account(
        OTHER_OWNER,
        AccountDraft(name="Z", kind="cash", opening_balance="50.00"),
    )
    return SimpleNamespace(
        category=category,
        x=x,
        y=y,
        foreign=foreign,
        accounts=accounts,
        reference=reference,
    )


@pytest.fixture
def balance(store):
    """Return a reader of one cached balance through a snapshot."""

    def _balance(account_id: int) -> Decimal:
        with store.snapshot() as reader:
            return reader.get_account(account_id).balance

    return _balance


@pytest.fixture
def draft(ledger):
    """Return a factory of valid movement drafts on account X."""

    def _draft(kind: str, amount: str, **overrides) -> MovementDraft:
        values = {
            "category_id": ledger.category.id,
            "account_id": ledger.x.id,
            "kind": kind,
            "amount": amount,
            "description": f"{kind} {amount}",
            "movement_date": date(2024, 1, 10),
            "to_account_id": ledger.y.id if kind == "transfer" else None,
        }
        values.update(overrides)
        return MovementDraft(**values)

    return _draft
