"""Ports for reading and mutating the ledger store."""

from collections.abc import Mapping
from contextlib import AbstractContextManager
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from pocketledger.domain.constants import MovementKind
from pocketledger.domain.models import (
    Account,
    AccountData,
    BillReminder,
    BillReminderData,
    Category,
    CategoryData,
    CategoryExpense,
    Movement,
    MovementData,
    MovementFilters,
)


class LedgerReaderPort(Protocol):
    """Read access to ledger records, scoped to one consistent snapshot."""

    def get_account(self, account_id: int) -> Account | None:
        """Return an account by id."""

    def list_accounts(self, owner_id: int) -> list[Account]:
        """Return the owner's accounts ordered by name."""

    def get_category(self, category_id: int) -> Category | None:
        """Return a category by id."""

    def list_categories(self) -> list[Category]:
        """Return every category ordered by kind then name."""

    def get_movement(self, movement_id: int) -> Movement | None:
        """Return a movement by id."""

    def get_bill_reminder(self, bill_id: int) -> BillReminder | None:
        """Return a bill reminder by id."""

    def sum_balances(self, owner_id: int) -> Decimal:
        """Return the sum of the owner's cached balances."""

    def sum_movements(
        self,
        owner_id: int,
        kind: MovementKind,
        start_date: date,
        end_date: date,
    ) -> Decimal:
        """Return the summed amount of one kind of movement in a date range."""

    def expense_totals_by_category(
        self,
        owner_id: int,
        start_date: date,
        end_date: date,
    ) -> list[CategoryExpense]:
        """Return expense totals grouped by category."""

    def recent_movements(self, owner_id: int, limit: int) -> list[Movement]:
        """Return the newest movements."""

    def upcoming_bills(
        self,
        owner_id: int,
        start_date: date,
        end_date: date,
        limit: int,
    ) -> list[BillReminder]:
        """Return unpaid bills due in the range, soonest first."""

    def count_movements(self, owner_id: int, filters: MovementFilters) -> int:
        """Return the number of movements matching the filters."""

    def find_movements(
        self,
        owner_id: int,
        filters: MovementFilters,
        offset: int,
        limit: int,
    ) -> list[Movement]:
        """Return one slice of the filtered, ordered movement log."""

    def list_movements_for_owner(self, owner_id: int) -> list[Movement]:
        """Return every movement of an owner."""

    def count_movements_for_account(self, account_id: int) -> int:
        """Return how many movements reference an account."""


class LedgerWriterPort(LedgerReaderPort, Protocol):
    """Write access used inside one atomic unit."""

    def lock_accounts(self, account_ids: set[int]) -> dict[int, Account]:
        """Lock and return the existing accounts among ``account_ids``."""

    def apply_deltas(self, deltas: Mapping[int, Decimal]) -> None:
        """Add each signed delta to the matching account balance."""

    def insert_movement(
        self,
        owner_id: int,
        data: MovementData,
        created_at: datetime,
    ) -> Movement:
        """Persist a new movement."""

    def replace_movement(self, movement_id: int, data: MovementData) -> Movement:
        """Overwrite a movement's fields, keeping id and created_at."""

    def delete_movement(self, movement_id: int) -> None:
        """Remove a movement."""

    def insert_account(self, owner_id: int, data: AccountData) -> Account:
        """Persist a new account whose balance starts at its opening balance."""

    def delete_account(self, account_id: int) -> None:
        """Remove an account."""

    def insert_category(self, data: CategoryData) -> Category:
        """Persist a new category."""

    def insert_bill_reminder(
        self,
        owner_id: int,
        data: BillReminderData,
    ) -> BillReminder:
        """Persist a new bill reminder."""

    def set_bill_paid(self, bill_id: int, is_paid: bool) -> BillReminder:
        """Update the paid flag of a bill reminder."""


class LedgerStorePort(Protocol):
    """Entry point handing out atomic units and read snapshots."""

    def unit_of_work(
        self,
        owner_id: int | None,
    ) -> AbstractContextManager[LedgerWriterPort]:
        """Open an atomic unit serialized with other units of the owner."""

    def snapshot(self) -> AbstractContextManager[LedgerReaderPort]:
        """Open a consistent read-only snapshot."""


__all__ = ["LedgerReaderPort", "LedgerWriterPort", "LedgerStorePort"]
