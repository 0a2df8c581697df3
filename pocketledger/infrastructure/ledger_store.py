"""SQLAlchemy-backed ledger store.

``SqlAlchemyLedgerStore`` hands out two kinds of scopes:

* ``unit_of_work(owner_id)``: one database transaction, serialized with every
  other unit of the same owner. SQLite units start with ``BEGIN IMMEDIATE``;
  other backends lock the touched account rows with ``SELECT ... FOR UPDATE``.
  Any store failure rolls the whole unit back and surfaces as
  ``ConflictError``.
* ``snapshot()``: one read transaction (REPEATABLE READ where supported) so
  multi-query reads never observe a half-applied unit.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from pocketledger.application.ports.database import DatabaseEnginePort
from pocketledger.application.ports.ledger_store import (
    LedgerReaderPort,
    LedgerStorePort,
    LedgerWriterPort,
)
from pocketledger.domain.constants import (
    AccountKind,
    BillFrequency,
    CategoryKind,
    MovementKind,
)
from pocketledger.domain.errors import ConflictError, NotFoundError
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
from pocketledger.infrastructure.db import SQLITE_BEGIN_OPTION
from pocketledger.infrastructure.locking import (
    OwnerLockRegistry,
    get_default_lock_registry,
)
from pocketledger.infrastructure.logging.logger import get_app_logger
from pocketledger.infrastructure.schema import (
    accounts,
    bill_reminders,
    categories,
    movements,
)
from pocketledger.utils.decimal_utils import coerce_decimal

_SNAPSHOT_ISOLATION = {
    "postgresql": "REPEATABLE READ",
    "mysql": "REPEATABLE READ",
}

_MOVEMENT_ORDER = (
    movements.c.movement_date.desc(),
    movements.c.created_at.desc(),
    movements.c.id.desc(),
)


def _row_to_account(row) -> Account:
    return Account(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        kind=AccountKind(row.kind),
        icon=row.icon,
        opening_balance=row.opening_balance,
        balance=row.balance,
    )


def _row_to_category(row) -> Category:
    return Category(
        id=row.id,
        name=row.name,
        icon=row.icon,
        color=row.color,
        kind=CategoryKind(row.kind),
    )


def _row_to_movement(row) -> Movement:
    return Movement(
        id=row.id,
        owner_id=row.owner_id,
        category_id=row.category_id,
        account_id=row.account_id,
        to_account_id=row.to_account_id,
        kind=MovementKind(row.kind),
        amount=row.amount,
        description=row.description,
        movement_date=row.movement_date,
        created_at=row.created_at,
    )


def _row_to_bill(row) -> BillReminder:
    return BillReminder(
        id=row.id,
        owner_id=row.owner_id,
        category_id=row.category_id,
        name=row.name,
        amount=row.amount,
        due_date=row.due_date,
        frequency=BillFrequency(row.frequency),
        is_paid=bool(row.is_paid),
    )


def _movement_values(data: MovementData) -> dict:
    return {
        "category_id": data.category_id,
        "account_id": data.account_id,
        "to_account_id": data.to_account_id,
        "kind": data.kind.value,
        "amount": data.amount,
        "description": data.description,
        "movement_date": data.movement_date,
    }


class SqlAlchemyLedgerSession(LedgerWriterPort):
    """Reads and writes bound to one open connection and transaction."""

    def __init__(self, conn: Connection) -> None:
        """Initialize the session.

        Args:
            conn: Connection with an active transaction.
        """
        self._conn = conn

    # Reads

    def get_account(self, account_id: int) -> Account | None:
        row = self._conn.execute(
            select(accounts).where(accounts.c.id == account_id)
        ).first()
        return _row_to_account(row) if row else None

    def list_accounts(self, owner_id: int) -> list[Account]:
        rows = self._conn.execute(
            select(accounts)
            .where(accounts.c.owner_id == owner_id)
            .order_by(accounts.c.name, accounts.c.id)
        ).all()
        return [_row_to_account(row) for row in rows]

    def get_category(self, category_id: int) -> Category | None:
        row = self._conn.execute(
            select(categories).where(categories.c.id == category_id)
        ).first()
        return _row_to_category(row) if row else None

    def list_categories(self) -> list[Category]:
        rows = self._conn.execute(
            select(categories).order_by(
                categories.c.kind,
                categories.c.name,
                categories.c.id,
            )
        ).all()
        return [_row_to_category(row) for row in rows]

    def get_movement(self, movement_id: int) -> Movement | None:
        row = self._conn.execute(
            select(movements).where(movements.c.id == movement_id)
        ).first()
        return _row_to_movement(row) if row else None

    def get_bill_reminder(self, bill_id: int) -> BillReminder | None:
        row = self._conn.execute(
            select(bill_reminders).where(bill_reminders.c.id == bill_id)
        ).first()
        return _row_to_bill(row) if row else None

    def sum_balances(self, owner_id: int) -> Decimal:
        total = self._conn.execute(
            select(func.sum(accounts.c.balance)).where(
                accounts.c.owner_id == owner_id
            )
        ).scalar()
        return coerce_decimal(total)

    def sum_movements(
        self,
        owner_id: int,
        kind: MovementKind,
        start_date: date,
        end_date: date,
    ) -> Decimal:
        total = self._conn.execute(
            select(func.sum(movements.c.amount)).where(
                movements.c.owner_id == owner_id,
                movements.c.kind == kind.value,
                movements.c.movement_date >= start_date,
                movements.c.movement_date <= end_date,
            )
        ).scalar()
        return coerce_decimal(total)

    def expense_totals_by_category(
        self,
        owner_id: int,
        start_date: date,
        end_date: date,
    ) -> list[CategoryExpense]:
        total = func.sum(movements.c.amount).label("total")
        query = (
            select(
                categories.c.id,
                categories.c.name,
                categories.c.icon,
                categories.c.color,
                total,
            )
            .select_from(
                movements.join(
                    categories,
                    categories.c.id == movements.c.category_id,
                )
            )
            .where(
                movements.c.owner_id == owner_id,
                movements.c.kind == MovementKind.EXPENSE.value,
                movements.c.movement_date >= start_date,
                movements.c.movement_date <= end_date,
            )
            .group_by(
                categories.c.id,
                categories.c.name,
                categories.c.icon,
                categories.c.color,
            )
            .order_by(categories.c.id)
        )
        rows = self._conn.execute(query).all()
        return [
            CategoryExpense(
                category_id=row.id,
                category=row.name,
                icon=row.icon,
                color=row.color,
                amount=coerce_decimal(row.total),
            )
            for row in rows
        ]

    def recent_movements(self, owner_id: int, limit: int) -> list[Movement]:
        rows = self._conn.execute(
            select(movements)
            .where(movements.c.owner_id == owner_id)
            .order_by(*_MOVEMENT_ORDER)
            .limit(limit)
        ).all()
        return [_row_to_movement(row) for row in rows]

    def upcoming_bills(
        self,
        owner_id: int,
        start_date: date,
        end_date: date,
        limit: int,
    ) -> list[BillReminder]:
        rows = self._conn.execute(
            select(bill_reminders)
            .where(
                bill_reminders.c.owner_id == owner_id,
                bill_reminders.c.is_paid.is_(False),
                bill_reminders.c.due_date >= start_date,
                bill_reminders.c.due_date <= end_date,
            )
            .order_by(bill_reminders.c.due_date, bill_reminders.c.id)
            .limit(limit)
        ).all()
        return [_row_to_bill(row) for row in rows]

    def count_movements(self, owner_id: int, filters: MovementFilters) -> int:
        count = self._conn.execute(
            select(func.count())
            .select_from(movements)
            .where(self._filter_clause(owner_id, filters))
        ).scalar()
        return int(count or 0)

    def find_movements(
        self,
        owner_id: int,
        filters: MovementFilters,
        offset: int,
        limit: int,
    ) -> list[Movement]:
        rows = self._conn.execute(
            select(movements)
            .where(self._filter_clause(owner_id, filters))
            .order_by(*_MOVEMENT_ORDER)
            .offset(offset)
            .limit(limit)
        ).all()
        return [_row_to_movement(row) for row in rows]

    def list_movements_for_owner(self, owner_id: int) -> list[Movement]:
        rows = self._conn.execute(
            select(movements)
            .where(movements.c.owner_id == owner_id)
            .order_by(movements.c.id)
        ).all()
        return [_row_to_movement(row) for row in rows]

    def count_movements_for_account(self, account_id: int) -> int:
        count = self._conn.execute(
            select(func.count())
            .select_from(movements)
            .where(
                (movements.c.account_id == account_id)
                | (movements.c.to_account_id == account_id)
            )
        ).scalar()
        return int(count or 0)

    @staticmethod
    def _filter_clause(owner_id: int, filters: MovementFilters):
        clauses = [movements.c.owner_id == owner_id]
        if filters.kind is not None:
            clauses.append(movements.c.kind == filters.kind.value)
        if filters.category_id is not None:
            clauses.append(movements.c.category_id == filters.category_id)
        if filters.account_id is not None:
            clauses.append(movements.c.account_id == filters.account_id)
        if filters.date_from is not None:
            clauses.append(movements.c.movement_date >= filters.date_from)
        if filters.date_to is not None:
            clauses.append(movements.c.movement_date <= filters.date_to)
        return and_(*clauses)

    # Writes

    def lock_accounts(self, account_ids: set[int]) -> dict[int, Account]:
        if not account_ids:
            return {}
        rows = self._conn.execute(
            select(accounts)
            .where(accounts.c.id.in_(sorted(account_ids)))
            .order_by(accounts.c.id)
            .with_for_update()
        ).all()
        return {row.id: _row_to_account(row) for row in rows}

    def apply_deltas(self, deltas: Mapping[int, Decimal]) -> None:
        for account_id, amount in sorted(deltas.items()):
            result = self._conn.execute(
                update(accounts)
                .where(accounts.c.id == account_id)
                .values(balance=accounts.c.balance + amount)
            )
            if result.rowcount != 1:
                raise NotFoundError("Account", account_id)

    def insert_movement(
        self,
        owner_id: int,
        data: MovementData,
        created_at: datetime,
    ) -> Movement:
        result = self._conn.execute(
            insert(movements).values(
                owner_id=owner_id,
                created_at=created_at,
                **_movement_values(data),
            )
        )
        movement_id = result.inserted_primary_key[0]
        return self._require_movement(movement_id)

    def replace_movement(self, movement_id: int, data: MovementData) -> Movement:
        result = self._conn.execute(
            update(movements)
            .where(movements.c.id == movement_id)
            .values(**_movement_values(data))
        )
        if result.rowcount != 1:
            raise NotFoundError("Movement", movement_id)
        return self._require_movement(movement_id)

    def delete_movement(self, movement_id: int) -> None:
        result = self._conn.execute(
            delete(movements).where(movements.c.id == movement_id)
        )
        if result.rowcount != 1:
            raise NotFoundError("Movement", movement_id)

    def insert_account(self, owner_id: int, data: AccountData) -> Account:
        result = self._conn.execute(
            insert(accounts).values(
                owner_id=owner_id,
                name=data.name,
                kind=data.kind.value,
                icon=data.icon,
                opening_balance=data.opening_balance,
                balance=data.opening_balance,
            )
        )
        account = self.get_account(result.inserted_primary_key[0])
        if account is None:
            raise NotFoundError("Account", result.inserted_primary_key[0])
        return account

    def delete_account(self, account_id: int) -> None:
        result = self._conn.execute(
            delete(accounts).where(accounts.c.id == account_id)
        )
        if result.rowcount != 1:
            raise NotFoundError("Account", account_id)

    def insert_category(self, data: CategoryData) -> Category:
        result = self._conn.execute(
            insert(categories).values(
                name=data.name,
                icon=data.icon,
                color=data.color,
                kind=data.kind.value,
            )
        )
        category = self.get_category(result.inserted_primary_key[0])
        if category is None:
            raise NotFoundError("Category", result.inserted_primary_key[0])
        return category

    def insert_bill_reminder(
        self,
        owner_id: int,
        data: BillReminderData,
    ) -> BillReminder:
        result = self._conn.execute(
            insert(bill_reminders).values(
                owner_id=owner_id,
                category_id=data.category_id,
                name=data.name,
                amount=data.amount,
                due_date=data.due_date,
                frequency=data.frequency.value,
                is_paid=data.is_paid,
            )
        )
        bill = self.get_bill_reminder(result.inserted_primary_key[0])
        if bill is None:
            raise NotFoundError("BillReminder", result.inserted_primary_key[0])
        return bill

    def set_bill_paid(self, bill_id: int, is_paid: bool) -> BillReminder:
        self._conn.execute(
            update(bill_reminders)
            .where(bill_reminders.c.id == bill_id)
            .values(is_paid=is_paid)
        )
        bill = self.get_bill_reminder(bill_id)
        if bill is None:
            raise NotFoundError("BillReminder", bill_id)
        return bill

    def _require_movement(self, movement_id: int) -> Movement:
        movement = self.get_movement(movement_id)
        if movement is None:
            raise NotFoundError("Movement", movement_id)
        return movement


class SqlAlchemyLedgerStore(LedgerStorePort):
    """Ledger store backed by a SQLAlchemy engine."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        lock_registry: OwnerLockRegistry | None = None,
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            lock_registry: Optional registry of per-owner locks; defaults to
                the process-wide registry.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._locks = lock_registry or get_default_lock_registry()
        self._logger = logger or get_app_logger()

    @contextmanager
    def unit_of_work(
        self,
        owner_id: int | None,
    ) -> Iterator[LedgerWriterPort]:
        """Open an atomic unit for ``owner_id``.

        Args:
            owner_id: Owner whose units must be serialized, or None for
                owner-less reference data.

        Yields:
            LedgerWriterPort: Session bound to the unit's transaction.

        Raises:
            ConflictError: If the store fails; the unit is rolled back.
        """
        if owner_id is None:
            with self._transaction(write=True) as session:
                yield session
            return
        with self._locks.lock_for(owner_id):
            with self._transaction(write=True) as session:
                yield session

    @contextmanager
    def snapshot(self) -> Iterator[LedgerReaderPort]:
        """Open a read transaction giving a consistent view of the ledger."""
        with self._transaction(write=False) as session:
            yield session

    @contextmanager
    def _transaction(self, write: bool) -> Iterator[SqlAlchemyLedgerSession]:
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.connect() as conn:
                options = {}
                dialect = conn.dialect.name
                if dialect == "sqlite":
                    options[SQLITE_BEGIN_OPTION] = (
                        "IMMEDIATE" if write else "DEFERRED"
                    )
                elif not write and dialect in _SNAPSHOT_ISOLATION:
                    options["isolation_level"] = _SNAPSHOT_ISOLATION[dialect]
                if options:
                    conn.execution_options(**options)
                with conn.begin():
                    yield SqlAlchemyLedgerSession(conn)
        except SQLAlchemyError as exc:
            self._logger.error(f"Ledger store failure, unit rolled back: {exc}")
            raise ConflictError(
                "The ledger store failed; no changes were applied"
            ) from exc


__all__ = ["SqlAlchemyLedgerStore", "SqlAlchemyLedgerSession"]
