"""Use case for categories and bill reminders."""

from pocketledger.application.ports.ledger_store import LedgerStorePort
from pocketledger.domain.models import (
    BillReminder,
    BillReminderDraft,
    Category,
    CategoryDraft,
)
from pocketledger.domain.policies import require_found, require_owned
from pocketledger.domain.services import (
    validate_bill_reminder_draft,
    validate_category_draft,
)
from pocketledger.infrastructure.logging.logger import get_app_logger


class ManageReferenceDataUseCase:
    """Maintain the reference data movements and dashboards rely on."""

    def __init__(self, ledger_store: LedgerStorePort, logger=None) -> None:
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()

    def add_category(self, draft: CategoryDraft) -> Category:
        """Create a shared category.

        Raises:
            ValidationError: If the draft is malformed.
        """
        data = validate_category_draft(draft)
        with self._ledger_store.unit_of_work(None) as session:
            category = session.insert_category(data)
        self._logger.info(f"Added category {category.id} '{category.name}'")
        return category

    def list_categories(self) -> list[Category]:
        """Return every category ordered by kind then name."""
        with self._ledger_store.snapshot() as reader:
            return reader.list_categories()

    def add_bill_reminder(
        self,
        owner_id: int,
        draft: BillReminderDraft,
    ) -> BillReminder:
        """Create a bill reminder for the owner.

        Args:
            owner_id: Owner of the reminder.
            draft: Raw reminder input.

        Returns:
            BillReminder: The persisted reminder.

        Raises:
            ValidationError: If the draft is malformed.
            NotFoundError: If the category does not exist.
        """
        data = validate_bill_reminder_draft(draft)
        with self._ledger_store.unit_of_work(owner_id) as session:
            require_found(
                "Category", data.category_id, session.get_category(data.category_id)
            )
            bill = session.insert_bill_reminder(owner_id, data)
        self._logger.info(
            f"Added bill reminder {bill.id} due {bill.due_date} "
            f"for owner {owner_id}"
        )
        return bill

    def mark_bill_paid(
        self,
        owner_id: int,
        bill_id: int,
        is_paid: bool = True,
    ) -> BillReminder:
        """Set the paid flag of one of the owner's bill reminders.

        Raises:
            NotFoundError: If the reminder does not exist.
            ForbiddenError: If the reminder belongs to another owner.
        """
        with self._ledger_store.unit_of_work(owner_id) as session:
            require_owned(
                "BillReminder",
                bill_id,
                session.get_bill_reminder(bill_id),
                owner_id,
            )
            return session.set_bill_paid(bill_id, is_paid)


__all__ = ["ManageReferenceDataUseCase"]
