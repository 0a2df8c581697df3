"""Delta computation for movements.

A movement's effect on balances is expressed as a delta map: the signed
amount each referenced account's balance moves by. Every mutation (create,
update, delete) goes through these helpers so sign rules live in one place.
"""

from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Protocol

from pocketledger.domain.constants import MovementKind

DeltaMap = dict[int, Decimal]


class MovementEffect(Protocol):
    """Fields of a movement that determine its balance effect."""

    kind: MovementKind
    account_id: int
    to_account_id: int | None
    amount: Decimal


def _income_deltas(movement: MovementEffect) -> DeltaMap:
    return {movement.account_id: movement.amount}


def _expense_deltas(movement: MovementEffect) -> DeltaMap:
    return {movement.account_id: -movement.amount}


def _transfer_deltas(movement: MovementEffect) -> DeltaMap:
    if movement.to_account_id is None:
        raise ValueError("Transfer movements require a destination account")
    if movement.to_account_id == movement.account_id:
        raise ValueError("Transfer source and destination must differ")
    return {
        movement.account_id: -movement.amount,
        movement.to_account_id: movement.amount,
    }


_DELTA_RULES: dict[MovementKind, Callable[[MovementEffect], DeltaMap]] = {
    MovementKind.INCOME: _income_deltas,
    MovementKind.EXPENSE: _expense_deltas,
    MovementKind.TRANSFER: _transfer_deltas,
}


def compute_delta_map(movement: MovementEffect) -> DeltaMap:
    """Return the balance effect of applying a movement.

    Args:
        movement: Movement or validated draft.

    Returns:
        DeltaMap: Signed amount per referenced account.
    """
    rule = _DELTA_RULES[MovementKind(movement.kind)]
    return rule(movement)


def invert_delta_map(deltas: Mapping[int, Decimal]) -> DeltaMap:
    """Return the delta map that exactly undoes ``deltas``."""
    return {account_id: -amount for account_id, amount in deltas.items()}


def combine_delta_maps(*delta_maps: Mapping[int, Decimal]) -> DeltaMap:
    """Sum several delta maps, dropping accounts whose net delta is zero.

    Args:
        *delta_maps: Delta maps applied within the same atomic unit.

    Returns:
        DeltaMap: Net delta per account.
    """
    combined: DeltaMap = {}
    for deltas in delta_maps:
        for account_id, amount in deltas.items():
            combined[account_id] = combined.get(account_id, Decimal("0")) + amount
    return {
        account_id: amount
        for account_id, amount in sorted(combined.items())
        if amount != 0
    }


def apply_delta_map(
    balances: Mapping[int, Decimal],
    deltas: Mapping[int, Decimal],
) -> dict[int, Decimal]:
    """Return new balances after applying ``deltas`` to ``balances``.

    Accounts missing from ``balances`` start at zero.
    """
    updated = dict(balances)
    for account_id, amount in deltas.items():
        updated[account_id] = updated.get(account_id, Decimal("0")) + amount
    return updated


__all__ = [
    "DeltaMap",
    "MovementEffect",
    "compute_delta_map",
    "invert_delta_map",
    "combine_delta_maps",
    "apply_delta_map",
]
