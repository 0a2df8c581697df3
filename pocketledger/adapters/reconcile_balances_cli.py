"""CLI adapter reporting cached balances that drifted from the history."""

import os

from pocketledger.domain.errors import LedgerError
from pocketledger.infrastructure.container import build_reconcile_balances
from pocketledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Reconcile LEDGER_OWNER_ID's balances; exit 1 when any drifted."""
    logger = get_app_logger()
    raw_owner = os.getenv("LEDGER_OWNER_ID", "").strip()
    try:
        owner_id = int(raw_owner)
    except ValueError:
        logger.error(f"Invalid LEDGER_OWNER_ID '{raw_owner}'.")
        raise SystemExit(2)

    use_case = build_reconcile_balances()
    try:
        report = use_case.execute(owner_id)
    except LedgerError as exc:
        logger.error(f"Reconciliation failed for owner {owner_id}: {exc}")
        raise SystemExit(1) from exc

    print(
        f"Checked {report.checked_accounts} accounts for owner {owner_id}."
    )
    for drift in report.drifts:
        print(
            f"  account {drift.account_id} '{drift.name}': "
            f"cached={drift.cached_balance} "
            f"replayed={drift.replayed_balance} "
            f"difference={drift.difference:+}"
        )
    if not report.is_consistent:
        raise SystemExit(1)
    print("All balances are consistent.")


if __name__ == "__main__":  # pragma: no cover
    main()
