"""Balance mutator: the only writer of account balances.

Create, update and delete all follow the same path: validate the draft,
open an atomic unit for the owner, check references and ownership, compute
the net delta map, apply it, then persist the movement record. Update nets
the reverted old delta map with the new one so the intermediate state is
never visible.
"""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from decimal import Decimal

from pocketledger.application.ports.ledger_store import (
    LedgerStorePort,
    LedgerWriterPort,
)
from pocketledger.domain.errors import ForbiddenError, NotFoundError
from pocketledger.domain.models import Movement, MovementData, MovementDraft
from pocketledger.domain.policies import require_found, require_owned
from pocketledger.domain.services import (
    combine_delta_maps,
    compute_delta_map,
    invert_delta_map,
    validate_movement_draft,
)
from pocketledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _format_deltas(deltas: Mapping[int, Decimal]) -> str:
    return ", ".join(
        f"{account_id}:{amount:+}" for account_id, amount in deltas.items()
    )


class BalanceMutator:
    """Apply movements to account balances atomically."""

    def __init__(
        self,
        ledger_store: LedgerStorePort,
        logger=None,
        usage_logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the mutator.

        Args:
            ledger_store: Port handing out atomic units.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger receiving one line per mutation.
            clock: Optional callable returning the creation timestamp.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._clock = clock or _utc_now

    def create(self, owner_id: int, draft: MovementDraft) -> Movement:
        """Record a new movement and apply its balance effect.

        Args:
            owner_id: Acting owner.
            draft: Raw movement input.

        Returns:
            Movement: The persisted movement.

        Raises:
            ValidationError: If the draft is malformed.
            NotFoundError: If the category or an account does not exist.
            ForbiddenError: If an account belongs to another owner.
            ConflictError: If the store fails; nothing is applied.
        """
        data = validate_movement_draft(draft)
        with self._ledger_store.unit_of_work(owner_id) as session:
            self._lock_and_check(session, owner_id, data)
            deltas = combine_delta_maps(compute_delta_map(data))
            session.apply_deltas(deltas)
            movement = session.insert_movement(owner_id, data, self._clock())
        self._record("create", owner_id, movement.id, deltas)
        return movement

    def update(
        self,
        owner_id: int,
        movement_id: int,
        draft: MovementDraft,
    ) -> Movement:
        """Replace a movement, reverting its old effect and applying the new one.

        Args:
            owner_id: Acting owner.
            movement_id: Identifier of the movement to replace.
            draft: Raw replacement input.

        Returns:
            Movement: The updated movement (same id and creation time).

        Raises:
            ValidationError: If the draft is malformed.
            NotFoundError: If the movement, category or an account is missing.
            ForbiddenError: If the movement or an account belongs to
                another owner.
            ConflictError: If the store fails; nothing is applied.
        """
        data = validate_movement_draft(draft)
        with self._ledger_store.unit_of_work(owner_id) as session:
            old = require_owned(
                "Movement",
                movement_id,
                session.get_movement(movement_id),
                owner_id,
            )
            old_deltas = compute_delta_map(old)
            self._lock_and_check(
                session, owner_id, data, also_lock=frozenset(old_deltas)
            )
            deltas = combine_delta_maps(
                invert_delta_map(old_deltas),
                compute_delta_map(data),
            )
            session.apply_deltas(deltas)
            movement = session.replace_movement(movement_id, data)
        self._record("update", owner_id, movement_id, deltas)
        return movement

    def delete(self, owner_id: int, movement_id: int) -> None:
        """Remove a movement and revert its balance effect.

        Args:
            owner_id: Acting owner.
            movement_id: Identifier of the movement to remove.

        Raises:
            NotFoundError: If the movement does not exist.
            ForbiddenError: If the movement belongs to another owner.
            ConflictError: If the store fails; nothing is applied.
        """
        with self._ledger_store.unit_of_work(owner_id) as session:
            movement = require_owned(
                "Movement",
                movement_id,
                session.get_movement(movement_id),
                owner_id,
            )
            deltas = combine_delta_maps(
                invert_delta_map(compute_delta_map(movement))
            )
            session.lock_accounts(set(deltas))
            session.apply_deltas(deltas)
            session.delete_movement(movement_id)
        self._record("delete", owner_id, movement_id, deltas)

    def _lock_and_check(
        self,
        session: LedgerWriterPort,
        owner_id: int,
        data: MovementData,
        also_lock: frozenset[int] = frozenset(),
    ) -> None:
        """Verify the category exists and every account is the owner's.

        The accounts of ``data`` (plus ``also_lock``) are locked so concurrent
        units touching them wait for this one.
        """
        require_found(
            "Category", data.category_id, session.get_category(data.category_id)
        )
        locked = session.lock_accounts(data.account_ids() | also_lock)
        for account_id in sorted(data.account_ids()):
            try:
                require_owned(
                    "Account", account_id, locked.get(account_id), owner_id
                )
            except (NotFoundError, ForbiddenError) as exc:
                self._logger.warning(
                    f"Rejected movement for owner {owner_id}: {exc}"
                )
                raise

    def _record(
        self,
        action: str,
        owner_id: int,
        movement_id: int,
        deltas: Mapping[int, Decimal],
    ) -> None:
        self._usage_logger.info(
            f"{action} movement={movement_id} owner={owner_id} "
            f"deltas=[{_format_deltas(deltas)}]"
        )


__all__ = ["BalanceMutator"]
