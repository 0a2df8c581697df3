"""Use case for opening, listing and closing accounts."""

from pocketledger.application.ports.ledger_store import LedgerStorePort
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.models import Account, AccountDraft
from pocketledger.domain.policies import require_owned
from pocketledger.domain.services import validate_account_draft
from pocketledger.infrastructure.logging.logger import get_app_logger


class ManageAccountsUseCase:
    """Manage the accounts an owner can record movements against."""

    def __init__(self, ledger_store: LedgerStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port handing out atomic units and snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()

    def open_account(self, owner_id: int, draft: AccountDraft) -> Account:
        """Create an account whose balance starts at its opening balance.

        Args:
            owner_id: Owner of the new account.
            draft: Raw account input.

        Returns:
            Account: The persisted account.

        Raises:
            ValidationError: If the draft is malformed.
        """
        data = validate_account_draft(draft)
        with self._ledger_store.unit_of_work(owner_id) as session:
            account = session.insert_account(owner_id, data)
        self._logger.info(
            f"Opened account {account.id} ({account.kind.value}) "
            f"for owner {owner_id}"
        )
        return account

    def list_accounts(self, owner_id: int) -> list[Account]:
        """Return the owner's accounts ordered by name."""
        with self._ledger_store.snapshot() as reader:
            return reader.list_accounts(owner_id)

    def get_account(self, owner_id: int, account_id: int) -> Account:
        """Return one account of the owner.

        Raises:
            NotFoundError: If the account does not exist.
            ForbiddenError: If the account belongs to another owner.
        """
        with self._ledger_store.snapshot() as reader:
            return require_owned(
                "Account", account_id, reader.get_account(account_id), owner_id
            )

    def close_account(self, owner_id: int, account_id: int) -> None:
        """Delete an account that no movement references.

        Args:
            owner_id: Acting owner.
            account_id: Identifier of the account to delete.

        Raises:
            NotFoundError: If the account does not exist.
            ForbiddenError: If the account belongs to another owner.
            ValidationError: If movements still reference the account.
        """
        with self._ledger_store.unit_of_work(owner_id) as session:
            locked = session.lock_accounts({account_id})
            require_owned(
                "Account", account_id, locked.get(account_id), owner_id
            )
            referencing = session.count_movements_for_account(account_id)
            if referencing:
                raise ValidationError(
                    {
                        "account_id": (
                            f"Account is referenced by {referencing} "
                            "movement(s) and cannot be closed."
                        )
                    }
                )
            session.delete_account(account_id)
        self._logger.info(f"Closed account {account_id} for owner {owner_id}")


__all__ = ["ManageAccountsUseCase"]
