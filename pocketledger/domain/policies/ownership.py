"""Ownership policy shared by every owner-scoped operation."""

from typing import TypeVar

from pocketledger.domain.errors import ForbiddenError, NotFoundError

T = TypeVar("T")


def require_owned(resource: str, identifier, record: T | None, owner_id: int) -> T:
    """Return ``record`` when it exists and belongs to ``owner_id``.

    Args:
        resource: Resource name used in error messages.
        identifier: Identifier that was looked up.
        record: Record returned by the store, or None when missing.
        owner_id: Identifier of the acting owner.

    Returns:
        The record itself.

    Raises:
        NotFoundError: If the record does not exist.
        ForbiddenError: If the record belongs to another owner.
    """
    if record is None:
        raise NotFoundError(resource, identifier)
    if getattr(record, "owner_id") != owner_id:
        raise ForbiddenError(resource, identifier)
    return record


def require_found(resource: str, identifier, record: T | None) -> T:
    """Return ``record`` or raise NotFoundError when it is missing."""
    if record is None:
        raise NotFoundError(resource, identifier)
    return record


__all__ = ["require_owned", "require_found"]
