"""Domain models for ledger records and drafts."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping

from pocketledger.domain.constants import (
    AccountKind,
    BillFrequency,
    CategoryKind,
    MovementKind,
)


@dataclass(frozen=True)
class Account:
    """Owned account with its cached balance.

    Attributes:
        id: Account identifier.
        owner_id: Identifier of the owning user.
        name: Display name.
        kind: Account kind.
        icon: Display icon.
        opening_balance: Balance declared when the account was opened.
        balance: Cached balance kept in sync by the balance mutator.
    """

    id: int
    owner_id: int
    name: str
    kind: AccountKind
    icon: str
    opening_balance: Decimal
    balance: Decimal


@dataclass(frozen=True)
class Category:
    """Reference category movements point to."""

    id: int
    name: str
    icon: str
    color: str
    kind: CategoryKind


@dataclass(frozen=True)
class Movement:
    """Persisted income, expense or transfer."""

    id: int
    owner_id: int
    category_id: int
    account_id: int
    to_account_id: int | None
    kind: MovementKind
    amount: Decimal
    description: str
    movement_date: date
    created_at: datetime


@dataclass(frozen=True)
class BillReminder:
    """Reminder for an upcoming bill."""

    id: int
    owner_id: int
    category_id: int
    name: str
    amount: Decimal
    due_date: date
    frequency: BillFrequency
    is_paid: bool


@dataclass(frozen=True)
class MovementDraft:
    """Unvalidated movement input as supplied by a collaborator.

    Field values are deliberately loose (strings, numbers, dates) and are
    normalized by ``validate_movement_draft``.
    """

    category_id: Any = None
    account_id: Any = None
    kind: Any = None
    amount: Any = None
    description: Any = None
    movement_date: Any = None
    to_account_id: Any = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "MovementDraft":
        """Build a draft from request-style field names.

        Args:
            payload: Mapping using ``type`` and ``transaction_date`` keys.

        Returns:
            MovementDraft: Draft carrying the raw values.
        """
        return cls(
            category_id=payload.get("category_id"),
            account_id=payload.get("account_id"),
            kind=payload.get("type"),
            amount=payload.get("amount"),
            description=payload.get("description"),
            movement_date=payload.get("transaction_date"),
            to_account_id=payload.get("to_account_id"),
        )


@dataclass(frozen=True)
class MovementData:
    """Validated movement values ready to be applied."""

    category_id: int
    account_id: int
    kind: MovementKind
    amount: Decimal
    description: str
    movement_date: date
    to_account_id: int | None = None

    def account_ids(self) -> set[int]:
        """Return every account the movement references."""
        ids = {self.account_id}
        if self.to_account_id is not None:
            ids.add(self.to_account_id)
        return ids


@dataclass(frozen=True)
class AccountDraft:
    """Unvalidated account input."""

    name: Any = None
    kind: Any = None
    icon: Any = None
    opening_balance: Any = None


@dataclass(frozen=True)
class AccountData:
    """Validated account values."""

    name: str
    kind: AccountKind
    icon: str
    opening_balance: Decimal


@dataclass(frozen=True)
class CategoryDraft:
    """Unvalidated category input."""

    name: Any = None
    icon: Any = None
    color: Any = None
    kind: Any = None


@dataclass(frozen=True)
class CategoryData:
    """Validated category values."""

    name: str
    icon: str
    color: str
    kind: CategoryKind


@dataclass(frozen=True)
class BillReminderDraft:
    """Unvalidated bill reminder input."""

    category_id: Any = None
    name: Any = None
    amount: Any = None
    due_date: Any = None
    frequency: Any = None
    is_paid: Any = False


@dataclass(frozen=True)
class BillReminderData:
    """Validated bill reminder values."""

    category_id: int
    name: str
    amount: Decimal
    due_date: date
    frequency: BillFrequency
    is_paid: bool = False


__all__ = [
    "Account",
    "Category",
    "Movement",
    "BillReminder",
    "MovementDraft",
    "MovementData",
    "AccountDraft",
    "AccountData",
    "CategoryDraft",
    "CategoryData",
    "BillReminderDraft",
    "BillReminderData",
]
