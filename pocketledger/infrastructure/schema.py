"""SQLAlchemy table definitions for the ledger store.

Money columns hold integer minor units (cents) through the ``Money`` type so
every backend stores balances exactly; Python code only sees 2-place
Decimals.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.engine import Engine
from sqlalchemy.types import TypeDecorator

from pocketledger.utils.decimal_utils import from_minor_units, to_minor_units


class Money(TypeDecorator):
    """Decimal amount persisted as integer cents."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return to_minor_units(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return from_minor_units(value)


metadata = MetaData()

categories = Table(
    "categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("icon", String(10), nullable=False),
    Column("color", String(7), nullable=False),
    Column("kind", String(20), nullable=False),
)

accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("owner_id", Integer, nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("kind", String(20), nullable=False),
    Column("icon", String(10), nullable=False),
    Column("opening_balance", Money, nullable=False, default=0),
    Column("balance", Money, nullable=False, default=0),
)

movements = Table(
    "movements",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("owner_id", Integer, nullable=False),
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "account_id",
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "to_account_id",
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("kind", String(20), nullable=False),
    Column("amount", Money, nullable=False),
    Column("description", String(255), nullable=False),
    Column("movement_date", Date, nullable=False),
    Column("created_at", DateTime, nullable=False),
    Index("ix_movements_owner_kind", "owner_id", "kind"),
    Index("ix_movements_owner_date", "owner_id", "movement_date"),
    Index("ix_movements_owner_category", "owner_id", "category_id"),
)

bill_reminders = Table(
    "bill_reminders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("owner_id", Integer, nullable=False),
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(255), nullable=False),
    Column("amount", Money, nullable=False),
    Column("due_date", Date, nullable=False),
    Column("frequency", String(20), nullable=False),
    Column("is_paid", Boolean, nullable=False, default=False),
    Index("ix_bill_reminders_owner_due", "owner_id", "due_date"),
    Index("ix_bill_reminders_owner_paid", "owner_id", "is_paid"),
)


def create_schema(engine: Engine) -> None:
    """Create every ledger table that does not exist yet.

    Args:
        engine: SQLAlchemy engine connected to the ledger database.
    """
    metadata.create_all(engine)


__all__ = [
    "Money",
    "metadata",
    "categories",
    "accounts",
    "movements",
    "bill_reminders",
    "create_schema",
]
