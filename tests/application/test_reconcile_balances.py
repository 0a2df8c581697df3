"""Tests for the ReconcileBalancesUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy import update

from pocketledger.application.use_cases.reconcile_balances import (
    ReconcileBalancesUseCase,
)
from pocketledger.infrastructure.schema import accounts

OWNER = 1


def test_consistent_ledger_reports_no_drift(
    store, ledger, mutator, draft
) -> None:
    mutator.create(OWNER, draft("income", "10.00"))
    mutator.create(OWNER, draft("transfer", "4.00"))

    report = ReconcileBalancesUseCase(store, logger=MagicMock()).execute(OWNER)

    assert report.is_consistent
    assert report.checked_accounts == 2


def test_tampered_balance_is_reported(
    engine, store, ledger, mutator, draft
) -> None:
    mutator.create(OWNER, draft("expense", "30.00"))
    with engine.begin() as conn:
        conn.execute(
            update(accounts)
            .where(accounts.c.id == ledger.y.id)
            .values(balance=Decimal("12.00"))
        )
    logger = MagicMock()

    report = ReconcileBalancesUseCase(store, logger=logger).execute(OWNER)

    assert not report.is_consistent
    assert len(report.drifts) == 1
    drift = report.drifts[0]
    assert drift.account_id == ledger.y.id
    assert drift.cached_balance == Decimal("12.00")
    assert drift.replayed_balance == Decimal("0.00")
    assert drift.difference == Decimal("12.00")
    logger.warning.assert_called_once()
