"""Tests for the ManageAccountsUseCase."""

from decimal import Decimal

import pytest

from pocketledger.domain.constants import AccountKind
from pocketledger.domain.errors import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from pocketledger.domain.models import AccountDraft

OWNER = 1
OTHER_OWNER = 2


def test_open_account_starts_at_opening_balance(ledger) -> None:
    account = ledger.accounts.open_account(
        OWNER,
        AccountDraft(
            name="Wallet", kind="cash", icon="W", opening_balance="12.345"
        ),
    )

    assert account.owner_id == OWNER
    assert account.kind is AccountKind.CASH
    assert account.opening_balance == Decimal("12.35")
    assert account.balance == Decimal("12.35")


def test_list_accounts_is_owner_scoped_and_sorted(ledger) -> None:
    names = [account.name for account in ledger.accounts.list_accounts(OWNER)]

    assert names == ["X", "Y"]
    assert [
        account.name for account in ledger.accounts.list_accounts(OTHER_OWNER)
    ] == ["Z"]


def test_get_account_checks_ownership(ledger) -> None:
    assert ledger.accounts.get_account(OWNER, ledger.x.id) == ledger.x
    with pytest.raises(ForbiddenError):
        ledger.accounts.get_account(OWNER, ledger.foreign.id)
    with pytest.raises(NotFoundError):
        ledger.accounts.get_account(OWNER, 999)


def test_close_account_refuses_referenced_accounts(
    ledger, mutator, draft
) -> None:
    mutator.create(OWNER, draft("transfer", "5.00"))

    with pytest.raises(ValidationError) as excinfo:
        ledger.accounts.close_account(OWNER, ledger.y.id)

    assert "account_id" in excinfo.value.errors
    assert ledger.accounts.get_account(OWNER, ledger.y.id).balance == Decimal(
        "5.00"
    )


def test_close_account_removes_unused_accounts(ledger) -> None:
    ledger.accounts.close_account(OWNER, ledger.y.id)

    with pytest.raises(NotFoundError):
        ledger.accounts.get_account(OWNER, ledger.y.id)
    with pytest.raises(ForbiddenError):
        ledger.accounts.close_account(OWNER, ledger.foreign.id)
