"""Use case checking cached balances against the movement history."""

from decimal import Decimal

from pocketledger.application.ports.ledger_store import LedgerStorePort
from pocketledger.domain.models import AccountDrift, ReconciliationReport
from pocketledger.domain.services import (
    apply_delta_map,
    combine_delta_maps,
    compute_delta_map,
)
from pocketledger.infrastructure.logging.logger import get_app_logger


class ReconcileBalancesUseCase:
    """Replay an owner's movements and report balance drift."""

    def __init__(self, ledger_store: LedgerStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port handing out read snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()

    def execute(self, owner_id: int) -> ReconciliationReport:
        """Compare every cached balance with opening balance plus deltas.

        Args:
            owner_id: Owner whose accounts are checked.

        Returns:
            ReconciliationReport: Accounts checked and those that drifted.
        """
        with self._ledger_store.snapshot() as reader:
            accounts = reader.list_accounts(owner_id)
            movements = reader.list_movements_for_owner(owner_id)

        deltas = combine_delta_maps(
            *(compute_delta_map(movement) for movement in movements)
        )
        replayed = apply_delta_map(
            {account.id: account.opening_balance for account in accounts},
            deltas,
        )
        drifts: list[AccountDrift] = []
        for account in sorted(accounts, key=lambda item: item.id):
            expected = replayed.get(account.id, Decimal("0"))
            if account.balance != expected:
                drifts.append(
                    AccountDrift(
                        account_id=account.id,
                        name=account.name,
                        cached_balance=account.balance,
                        replayed_balance=expected,
                    )
                )
        if drifts:
            self._logger.warning(
                f"Balance drift on {len(drifts)} account(s) for owner {owner_id}"
            )
        else:
            self._logger.info(
                f"Balances consistent for owner {owner_id} "
                f"({len(accounts)} accounts, {len(movements)} movements)"
            )
        return ReconciliationReport(
            owner_id=owner_id,
            checked_accounts=len(accounts),
            drifts=drifts,
        )


__all__ = ["ReconcileBalancesUseCase"]
