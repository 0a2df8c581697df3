"""Tests for draft validation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from pocketledger.domain.constants import AccountKind, MovementKind
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.models import (
    AccountDraft,
    BillReminderDraft,
    CategoryDraft,
    MovementDraft,
)
from pocketledger.domain.services.validation import (
    validate_account_draft,
    validate_bill_reminder_draft,
    validate_category_draft,
    validate_movement_draft,
)


def _draft(**overrides) -> MovementDraft:
    values = {
        "category_id": 1,
        "account_id": 1,
        "kind": "expense",
        "amount": "12.5",
        "description": "Groceries",
        "movement_date": "2024-01-15",
    }
    values.update(overrides)
    return MovementDraft(**values)


def test_valid_draft_is_normalized() -> None:
    data = validate_movement_draft(_draft(category_id="3", kind="EXPENSE "))

    assert data.category_id == 3
    assert data.kind is MovementKind.EXPENSE
    assert data.amount == Decimal("12.50")
    assert data.movement_date == date(2024, 1, 15)
    assert data.to_account_id is None


def test_from_mapping_reads_request_field_names() -> None:
    draft = MovementDraft.from_mapping(
        {
            "category_id": 1,
            "account_id": 2,
            "type": "transfer",
            "amount": 5,
            "description": "Move",
            "transaction_date": datetime(2024, 2, 1, 10, 30),
            "to_account_id": 3,
        }
    )

    data = validate_movement_draft(draft)

    assert data.kind is MovementKind.TRANSFER
    assert data.movement_date == date(2024, 2, 1)
    assert data.account_ids() == {2, 3}


def test_amount_below_one_cent_is_rejected_before_rounding() -> None:
    assert validate_movement_draft(_draft(amount="0.015")).amount == Decimal(
        "0.02"
    )
    with pytest.raises(ValidationError) as excinfo:
        validate_movement_draft(_draft(amount="0.005"))

    assert excinfo.value.errors == {"amount": "Amount must be at least 0.01."}


@pytest.mark.parametrize(
    "amount", ["1e30", "1e20", "10000000000000", "9999999999999.999"]
)
def test_amount_beyond_thirteen_integer_digits_is_rejected(amount) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_movement_draft(_draft(amount=amount))

    assert excinfo.value.errors == {
        "amount": "Amount may not exceed 9999999999999.99."
    }


def test_largest_amount_is_accepted() -> None:
    data = validate_movement_draft(_draft(amount="9999999999999.99"))

    assert data.amount == Decimal("9999999999999.99")


@pytest.mark.parametrize("amount", ["abc", "NaN", "inf"])
def test_non_numeric_amount_is_rejected(amount) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_movement_draft(_draft(amount=amount))

    assert set(excinfo.value.errors) == {"amount"}


def test_all_field_errors_are_reported_together() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_movement_draft(
            MovementDraft(
                kind="gift",
                amount="abc",
                description="x" * 256,
                movement_date="2024-02-30",
            )
        )

    assert set(excinfo.value.errors) == {
        "category_id",
        "account_id",
        "type",
        "amount",
        "description",
        "transaction_date",
    }


def test_transfer_requires_a_distinct_destination() -> None:
    with pytest.raises(ValidationError) as missing:
        validate_movement_draft(_draft(kind="transfer"))
    with pytest.raises(ValidationError) as same:
        validate_movement_draft(_draft(kind="transfer", to_account_id=1))

    assert "to_account_id" in missing.value.errors
    assert same.value.errors["to_account_id"] == (
        "Destination account must be different from source account."
    )


def test_destination_is_rejected_for_non_transfers() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_movement_draft(_draft(kind="income", to_account_id=2))

    assert excinfo.value.errors == {
        "to_account_id": "Destination account is only allowed for transfers."
    }


@pytest.mark.parametrize("description", ["", "   ", None])
def test_blank_description_is_rejected(description) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_movement_draft(_draft(description=description))

    assert "description" in excinfo.value.errors


def test_account_draft_defaults_and_negative_opening_balance() -> None:
    data = validate_account_draft(
        AccountDraft(name=" Card ", kind="credit_card", opening_balance="-20")
    )

    assert data.name == "Card"
    assert data.kind is AccountKind.CREDIT_CARD
    assert data.icon == "🏦"
    assert data.opening_balance == Decimal("-20.00")


def test_category_draft_checks_lengths_and_kind() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_category_draft(
            CategoryDraft(name="Food", icon="i" * 11, color="#1234567", kind="x")
        )

    assert set(excinfo.value.errors) == {"icon", "color", "type"}


def test_bill_reminder_draft_requires_frequency_and_positive_amount() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_bill_reminder_draft(
            BillReminderDraft(
                category_id=1,
                name="Rent",
                amount="0",
                due_date="2024-02-01",
                frequency="daily",
            )
        )

    assert set(excinfo.value.errors) == {"amount", "frequency"}


def test_opening_balance_must_fit_the_money_column() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_account_draft(
            AccountDraft(name="Vault", kind="savings", opening_balance="-1e15")
        )

    assert set(excinfo.value.errors) == {"opening_balance"}


def test_missing_fields_use_their_required_messages() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_movement_draft(_draft(category_id=" ", kind=None))

    assert excinfo.value.errors == {
        "category_id": "Please select a category.",
        "type": "Transaction type is required.",
    }
