"""Domain models for movement list queries and reconciliation reports."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pocketledger.domain.constants import MovementKind
from pocketledger.domain.models.ledger import Movement


@dataclass(frozen=True)
class MovementFilters:
    """Optional filters combined with logical AND.

    Attributes:
        kind: Movement kind to keep.
        category_id: Category to keep.
        account_id: Source account to keep.
        date_from: Inclusive lower date bound.
        date_to: Inclusive upper date bound.
    """

    kind: MovementKind | None = None
    category_id: int | None = None
    account_id: int | None = None
    date_from: date | None = None
    date_to: date | None = None


@dataclass(frozen=True)
class MovementPage:
    """One page of movements plus the total match count."""

    items: list[Movement]
    total: int
    page: int
    page_size: int

    @property
    def last_page(self) -> int:
        """Return the last page number (at least 1)."""
        if self.total == 0:
            return 1
        return (self.total + self.page_size - 1) // self.page_size


@dataclass(frozen=True)
class AccountDrift:
    """Difference between a cached balance and its replayed value."""

    account_id: int
    name: str
    cached_balance: Decimal
    replayed_balance: Decimal

    @property
    def difference(self) -> Decimal:
        """Return cached minus replayed balance."""
        return self.cached_balance - self.replayed_balance


@dataclass(frozen=True)
class ReconciliationReport:
    """Result of replaying every movement of an owner."""

    owner_id: int
    checked_accounts: int
    drifts: list[AccountDrift]

    @property
    def is_consistent(self) -> bool:
        return not self.drifts


__all__ = [
    "MovementFilters",
    "MovementPage",
    "AccountDrift",
    "ReconciliationReport",
]
