"""Domain package for ledger rules and core models."""

from .constants import AccountKind, BillFrequency, CategoryKind, MovementKind
from .errors import (
    ConflictError,
    ForbiddenError,
    LedgerError,
    NotFoundError,
    ValidationError,
)
from .models import (
    Account,
    BillReminder,
    Category,
    DashboardSummary,
    Movement,
    MovementData,
    MovementDraft,
    MovementFilters,
    MovementPage,
)
from .policies import require_found, require_owned
from .services import (
    combine_delta_maps,
    compute_delta_map,
    invert_delta_map,
    validate_movement_draft,
)

__all__ = [
    "AccountKind",
    "BillFrequency",
    "CategoryKind",
    "MovementKind",
    "ConflictError",
    "ForbiddenError",
    "LedgerError",
    "NotFoundError",
    "ValidationError",
    "Account",
    "BillReminder",
    "Category",
    "DashboardSummary",
    "Movement",
    "MovementData",
    "MovementDraft",
    "MovementFilters",
    "MovementPage",
    "require_found",
    "require_owned",
    "combine_delta_maps",
    "compute_delta_map",
    "invert_delta_map",
    "validate_movement_draft",
]
