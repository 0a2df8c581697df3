"""Tests for the delta map helpers."""

from datetime import date
from decimal import Decimal

import pytest

from pocketledger.domain.constants import MovementKind
from pocketledger.domain.models import MovementData
from pocketledger.domain.services.deltas import (
    apply_delta_map,
    combine_delta_maps,
    compute_delta_map,
    invert_delta_map,
)


def _movement(kind, amount="10.00", account_id=1, to_account_id=None):
    return MovementData(
        category_id=1,
        account_id=account_id,
        kind=kind,
        amount=Decimal(amount),
        description="test",
        movement_date=date(2024, 1, 1),
        to_account_id=to_account_id,
    )


def test_income_credits_the_source_account() -> None:
    assert compute_delta_map(_movement(MovementKind.INCOME)) == {
        1: Decimal("10.00")
    }


def test_expense_debits_the_source_account() -> None:
    assert compute_delta_map(_movement(MovementKind.EXPENSE)) == {
        1: Decimal("-10.00")
    }


def test_transfer_moves_amount_between_accounts() -> None:
    deltas = compute_delta_map(
        _movement(MovementKind.TRANSFER, "300.00", to_account_id=2)
    )

    assert deltas == {1: Decimal("-300.00"), 2: Decimal("300.00")}
    assert sum(deltas.values()) == 0


def test_transfer_rule_rejects_missing_or_same_destination() -> None:
    with pytest.raises(ValueError):
        compute_delta_map(_movement(MovementKind.TRANSFER))
    with pytest.raises(ValueError):
        compute_delta_map(_movement(MovementKind.TRANSFER, to_account_id=1))


def test_invert_flips_every_sign() -> None:
    deltas = {1: Decimal("-5.25"), 2: Decimal("5.25")}

    assert invert_delta_map(deltas) == {1: Decimal("5.25"), 2: Decimal("-5.25")}
    assert combine_delta_maps(deltas, invert_delta_map(deltas)) == {}


def test_combine_nets_entries_and_drops_zeroes() -> None:
    old = compute_delta_map(_movement(MovementKind.EXPENSE, "100.00"))
    new = compute_delta_map(_movement(MovementKind.INCOME, "100.00"))

    assert combine_delta_maps(invert_delta_map(old), new) == {
        1: Decimal("200.00")
    }
    assert combine_delta_maps(
        {2: Decimal("1.00")}, {1: Decimal("3.00")}, {2: Decimal("-1.00")}
    ) == {1: Decimal("3.00")}


def test_apply_delta_map_starts_unknown_accounts_at_zero() -> None:
    balances = {1: Decimal("1000.00")}

    updated = apply_delta_map(
        balances, {1: Decimal("-300.00"), 2: Decimal("300.00")}
    )

    assert updated == {1: Decimal("700.00"), 2: Decimal("300.00")}
    assert balances == {1: Decimal("1000.00")}
