"""Input schemas checking raw drafts before they reach the ledger.

Each schema parses one kind of draft with pydantic v2. Field aliases carry
the request-style names (``type``, ``transaction_date``) so validation
errors are keyed the way callers submitted them. Blank values are removed
before validation, which turns them into ``missing`` errors.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, ClassVar, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

from pocketledger.domain.constants import (
    COLOR_MAX_LENGTH,
    DEFAULT_ACCOUNT_ICON,
    DESCRIPTION_MAX_LENGTH,
    ICON_MAX_LENGTH,
    NAME_MAX_LENGTH,
    AccountKind,
    BillFrequency,
    CategoryKind,
    MovementKind,
)
from pocketledger.utils.decimal_utils import (
    MONEY_LIMIT,
    MONEY_QUANTUM,
    quantize_money,
)

Identifier = Annotated[int, Field(gt=0)]


def _normalize_choice(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def _bounded_money(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise ValueError("Amount must be a number.")
    # The quantize is only attempted once the magnitude is known to fit.
    if abs(value) >= MONEY_LIMIT or abs(quantize_money(value)) >= MONEY_LIMIT:
        raise ValueError(f"Amount may not exceed {MONEY_LIMIT - MONEY_QUANTUM}.")
    return quantize_money(value)


def _positive_money(value: Decimal) -> Decimal:
    if value.is_finite() and value < MONEY_QUANTUM:
        raise ValueError(f"Amount must be at least {MONEY_QUANTUM}.")
    return _bounded_money(value)


class _DraftSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    required_messages: ClassVar[dict[str, str]] = {}


class MovementInput(_DraftSchema):
    """Income, expense or transfer as submitted by a caller."""

    required_messages: ClassVar[dict[str, str]] = {
        "category_id": "Please select a category.",
        "account_id": "Please select an account.",
        "type": "Transaction type is required.",
        "amount": "Amount is required.",
        "description": "Description is required.",
        "transaction_date": "Transaction date is required.",
        "to_account_id": "Please select a destination account.",
    }

    category_id: Identifier
    account_id: Identifier
    kind: MovementKind = Field(alias="type")
    amount: Decimal
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    movement_date: date = Field(alias="transaction_date")
    to_account_id: Optional[Identifier] = Field(
        default=None,
        validate_default=True,
    )

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value):
        return _normalize_choice(value)

    @field_validator("movement_date", mode="before")
    @classmethod
    def normalize_date(cls, value):
        return _as_date(value)

    @field_validator("amount")
    @classmethod
    def check_amount(cls, value: Decimal) -> Decimal:
        return _positive_money(value)

    @field_validator("to_account_id")
    @classmethod
    def check_destination(
        cls,
        value: Optional[int],
        info: ValidationInfo,
    ) -> Optional[int]:
        """Require a distinct destination for transfers and none otherwise."""
        kind = info.data.get("kind")
        if kind is None:
            return value
        if kind is not MovementKind.TRANSFER:
            if value is not None:
                raise ValueError(
                    "Destination account is only allowed for transfers."
                )
            return value
        if value is None:
            raise ValueError(cls.required_messages["to_account_id"])
        if value == info.data.get("account_id"):
            raise ValueError(
                "Destination account must be different from source account."
            )
        return value


class AccountInput(_DraftSchema):
    """Account opening request."""

    required_messages: ClassVar[dict[str, str]] = {
        "name": "Account name is required.",
        "kind": "Account kind is required.",
    }

    name: str = Field(max_length=NAME_MAX_LENGTH)
    kind: AccountKind
    icon: str = Field(default=DEFAULT_ACCOUNT_ICON, max_length=ICON_MAX_LENGTH)
    opening_balance: Decimal = Decimal("0.00")

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value):
        return _normalize_choice(value)

    @field_validator("opening_balance")
    @classmethod
    def check_opening_balance(cls, value: Decimal) -> Decimal:
        """Opening balances may be negative but must fit the money column."""
        return _bounded_money(value)


class CategoryInput(_DraftSchema):
    """Shared category definition."""

    required_messages: ClassVar[dict[str, str]] = {
        "name": "Category name is required.",
        "icon": "Category icon is required.",
        "color": "Category color is required.",
        "type": "Category type is required.",
    }

    name: str = Field(max_length=NAME_MAX_LENGTH)
    icon: str = Field(max_length=ICON_MAX_LENGTH)
    color: str = Field(max_length=COLOR_MAX_LENGTH)
    kind: CategoryKind = Field(alias="type")

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value):
        return _normalize_choice(value)


class BillReminderInput(_DraftSchema):
    """Bill reminder request."""

    required_messages: ClassVar[dict[str, str]] = {
        "category_id": "Please select a category.",
        "name": "Bill name is required.",
        "amount": "Amount is required.",
        "due_date": "Due date is required.",
        "frequency": "Frequency is required.",
    }

    category_id: Identifier
    name: str = Field(max_length=NAME_MAX_LENGTH)
    amount: Decimal
    due_date: date
    frequency: BillFrequency
    is_paid: bool = False

    @field_validator("frequency", mode="before")
    @classmethod
    def normalize_frequency(cls, value):
        return _normalize_choice(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_date(cls, value):
        return _as_date(value)

    @field_validator("amount")
    @classmethod
    def check_amount(cls, value: Decimal) -> Decimal:
        return _positive_money(value)


__all__ = [
    "MovementInput",
    "AccountInput",
    "CategoryInput",
    "BillReminderInput",
]
