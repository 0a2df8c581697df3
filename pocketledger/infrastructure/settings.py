"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from pocketledger.domain.constants import (
    DEFAULT_BILLS_HORIZON_DAYS,
    DEFAULT_BILLS_LIMIT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_TREND_MONTHS,
)
from pocketledger.infrastructure.logging.logger import get_app_logger
from pocketledger.utils.utils import get_project_root


def default_database_url() -> str:
    """Return the SQLite URL used when LEDGER_DB_URL is not set."""
    return f"sqlite:///{get_project_root() / 'data' / 'ledger.db'}"


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger store and dashboard defaults.

    Attributes:
        db_url: SQLAlchemy database URL.
        page_size: Movements per list page.
        recent_limit: Movements shown in recent activity.
        bills_horizon_days: Days ahead scanned for upcoming bills.
        bills_limit: Maximum upcoming bills returned.
        trend_months: Months covered by the monthly trend.
        sqlite_timeout: SQLite busy timeout in seconds.
    """

    db_url: str
    page_size: int = DEFAULT_PAGE_SIZE
    recent_limit: int = DEFAULT_RECENT_LIMIT
    bills_horizon_days: int = DEFAULT_BILLS_HORIZON_DAYS
    bills_limit: int = DEFAULT_BILLS_LIMIT
    trend_months: int = DEFAULT_TREND_MONTHS
    sqlite_timeout: int = 30

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables (and a .env file).

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        db_url = os.getenv("LEDGER_DB_URL", "").strip() or default_database_url()
        return cls(
            db_url=db_url,
            page_size=cls._read_int("LEDGER_PAGE_SIZE", DEFAULT_PAGE_SIZE, logger),
            recent_limit=cls._read_int(
                "LEDGER_RECENT_LIMIT", DEFAULT_RECENT_LIMIT, logger
            ),
            bills_horizon_days=cls._read_int(
                "LEDGER_BILLS_HORIZON_DAYS", DEFAULT_BILLS_HORIZON_DAYS, logger
            ),
            bills_limit=cls._read_int(
                "LEDGER_BILLS_LIMIT", DEFAULT_BILLS_LIMIT, logger
            ),
            trend_months=cls._read_int(
                "LEDGER_TREND_MONTHS", DEFAULT_TREND_MONTHS, logger
            ),
            sqlite_timeout=cls._read_int("LEDGER_SQLITE_TIMEOUT", 30, logger),
        )

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        """Read a positive integer variable, falling back to ``default``.

        Args:
            name: Environment variable name.
            default: Value used when missing or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid integer for {name}: '{raw}'. Using {default}.")
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive, got {value}. Using {default}.")
            return default
        return value


__all__ = ["LedgerSettings", "default_database_url"]
