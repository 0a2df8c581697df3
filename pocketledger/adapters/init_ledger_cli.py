"""CLI adapter creating the ledger tables in the configured database."""

from pocketledger.infrastructure.container import build_database_adapter
from pocketledger.infrastructure.logging.logger import get_app_logger
from pocketledger.infrastructure.schema import create_schema


def main() -> None:
    """Create every missing ledger table."""
    logger = get_app_logger()
    engine = build_database_adapter().get_ledger_engine()
    create_schema(engine)
    logger.info(f"Ledger schema ready on {engine.url}")
    print(f"Ledger schema ready on {engine.url}.")


if __name__ == "__main__":  # pragma: no cover
    main()
