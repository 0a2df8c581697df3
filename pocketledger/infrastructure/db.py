"""Database infrastructure for the personal ledger.

This module exposes helpers to create and reuse the SQLAlchemy engine
connected to the ledger database. SQLite engines are configured so that
write units start with ``BEGIN IMMEDIATE`` and foreign keys are enforced.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.pool import QueuePool

from pocketledger.application.ports.database import DatabaseEnginePort
from pocketledger.infrastructure.settings import LedgerSettings

SQLITE_BEGIN_OPTION = "sqlite_begin"


def _create_engine(db_url: str, sqlite_timeout: int = 30) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL (including driver and credentials).
        sqlite_timeout: Busy timeout in seconds for SQLite databases.

    Returns:
        Engine: A SQLAlchemy engine. Server databases get a small connection
        pool with health checks enabled.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).expanduser().parent.mkdir(
                parents=True,
                exist_ok=True,
            )
        engine = create_engine(
            db_url,
            connect_args={"timeout": sqlite_timeout, "check_same_thread": False},
        )
        _configure_sqlite(engine)
        return engine
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
    )


def _configure_sqlite(engine: Engine) -> None:
    """Take over transaction control from the sqlite3 driver.

    The driver's implicit transactions are disabled so each SQLAlchemy
    transaction emits its own ``BEGIN``; connections flagged with the
    ``sqlite_begin`` execution option (``IMMEDIATE``) take the write lock up
    front.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        mode = conn.get_execution_options().get(SQLITE_BEGIN_OPTION, "DEFERRED")
        conn.exec_driver_sql(f"BEGIN {mode}")


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Returns:
        Engine: Lazily initialized engine connected to the ledger store.
    """
    global _ledger_engine
    if _ledger_engine is None:
        settings = LedgerSettings.from_env()
        _ledger_engine = _create_engine(settings.db_url, settings.sqlite_timeout)
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application use cases can depend only on the protocol.
    An explicit engine may be supplied, which tests use to target a
    temporary database.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger store.
        """
        if self._engine is not None:
            return self._engine
        return get_ledger_engine()


__all__ = [
    "SQLITE_BEGIN_OPTION",
    "get_ledger_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
