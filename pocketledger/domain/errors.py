"""Error taxonomy raised by the ledger core.

Every error derives from ``LedgerError`` so callers can catch the whole
family, while still telling terminal failures (validation, not found,
forbidden) apart from retryable store failures (conflict).
"""


class LedgerError(Exception):
    """Base class for ledger core errors."""


class ValidationError(LedgerError):
    """A draft is malformed; raised before any state is touched.

    Attributes:
        errors: Mapping of field name to human readable message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        details = "; ".join(
            f"{field}: {message}" for field, message in sorted(self.errors.items())
        )
        super().__init__(f"Invalid input: {details}")


class NotFoundError(LedgerError):
    """A referenced record does not exist."""

    def __init__(self, resource: str, identifier) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class ForbiddenError(LedgerError):
    """A record exists but belongs to another owner."""

    def __init__(self, resource: str, identifier) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} is not accessible")


class ConflictError(LedgerError):
    """The store failed mid-unit; the unit was rolled back and may be retried."""


__all__ = [
    "LedgerError",
    "ValidationError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
]
