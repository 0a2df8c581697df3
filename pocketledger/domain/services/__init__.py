"""Domain services package."""

from .deltas import (
    DeltaMap,
    apply_delta_map,
    combine_delta_maps,
    compute_delta_map,
    invert_delta_map,
)
from .periods import (
    current_month_range,
    last_months,
    month_label,
    month_range,
    resolve_date_range,
)
from .validation import (
    validate_account_draft,
    validate_bill_reminder_draft,
    validate_category_draft,
    validate_movement_draft,
)

__all__ = [
    "DeltaMap",
    "apply_delta_map",
    "combine_delta_maps",
    "compute_delta_map",
    "invert_delta_map",
    "current_month_range",
    "last_months",
    "month_label",
    "month_range",
    "resolve_date_range",
    "validate_account_draft",
    "validate_bill_reminder_draft",
    "validate_category_draft",
    "validate_movement_draft",
]
