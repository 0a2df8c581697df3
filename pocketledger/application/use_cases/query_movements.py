"""Use case listing and looking up movements for list views."""

from pocketledger.application.ports.ledger_store import LedgerStorePort
from pocketledger.domain.constants import DEFAULT_PAGE_SIZE
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.models import Movement, MovementFilters, MovementPage
from pocketledger.domain.policies import require_owned
from pocketledger.infrastructure.logging.logger import get_app_logger


class MovementQuery:
    """Filter, sort and paginate an owner's movement log."""

    def __init__(
        self,
        ledger_store: LedgerStorePort,
        logger=None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize the query.

        Args:
            ledger_store: Port handing out read snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
            page_size: Default number of movements per page.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()
        self._page_size = page_size

    def list(
        self,
        owner_id: int,
        filters: MovementFilters | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> MovementPage:
        """Return one page of the owner's movements.

        Movements are ordered by date desc, then creation time desc, then id
        desc. Filters combine with AND.

        Args:
            owner_id: Owner whose movements are listed.
            filters: Optional filters; None lists everything.
            page: 1-based page number.
            page_size: Optional override of the default page size.

        Returns:
            MovementPage: Items of the page and the total match count.

        Raises:
            ValidationError: If the page, page size or date bounds are invalid.
            NotFoundError: If the account filter names an unknown account.
            ForbiddenError: If the account filter names a foreign account.
        """
        resolved_filters = filters or MovementFilters()
        size = page_size if page_size is not None else self._page_size
        errors = {}
        if page < 1:
            errors["page"] = "Page must be 1 or greater."
        if size < 1:
            errors["page_size"] = "Page size must be 1 or greater."
        if (
            resolved_filters.date_from is not None
            and resolved_filters.date_to is not None
            and resolved_filters.date_from > resolved_filters.date_to
        ):
            errors["date_from"] = "Start date must be on or before the end date."
        if errors:
            raise ValidationError(errors)

        with self._ledger_store.snapshot() as reader:
            if resolved_filters.account_id is not None:
                require_owned(
                    "Account",
                    resolved_filters.account_id,
                    reader.get_account(resolved_filters.account_id),
                    owner_id,
                )
            total = reader.count_movements(owner_id, resolved_filters)
            items = reader.find_movements(
                owner_id,
                resolved_filters,
                offset=(page - 1) * size,
                limit=size,
            )
        self._logger.debug(
            f"Listed {len(items)} of {total} movements for owner {owner_id}"
        )
        return MovementPage(items=items, total=total, page=page, page_size=size)

    def get(self, owner_id: int, movement_id: int) -> Movement:
        """Return one movement of the owner.

        Raises:
            NotFoundError: If the movement does not exist.
            ForbiddenError: If the movement belongs to another owner.
        """
        with self._ledger_store.snapshot() as reader:
            return require_owned(
                "Movement",
                movement_id,
                reader.get_movement(movement_id),
                owner_id,
            )


__all__ = ["MovementQuery"]
