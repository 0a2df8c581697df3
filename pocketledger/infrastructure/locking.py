"""In-process mutual exclusion keyed by owner."""

import threading


class OwnerLockRegistry:
    """Hand out one re-entrant lock per owner.

    Every account belongs to exactly one owner, so serializing units per owner
    serializes every pair of units that could touch the same account.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.RLock] = {}

    def lock_for(self, owner_id: int) -> threading.RLock:
        """Return the lock guarding ``owner_id``, creating it on first use."""
        with self._guard:
            lock = self._locks.get(owner_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[owner_id] = lock
            return lock


_default_registry = OwnerLockRegistry()


def get_default_lock_registry() -> OwnerLockRegistry:
    """Return the process-wide registry shared by every store instance."""
    return _default_registry


__all__ = ["OwnerLockRegistry", "get_default_lock_registry"]
