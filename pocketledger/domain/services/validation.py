"""Domain validation helpers for ledger drafts.

Each ``validate_*`` function runs a draft through its pydantic input schema
and either returns the normalized values or raises a single
``ValidationError`` listing every field problem. None of them touch
storage: referential checks (does the category exist, who owns the account)
belong to the use cases.
"""

from dataclasses import asdict
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from pocketledger.domain.errors import ValidationError
from pocketledger.domain.models.inputs import (
    AccountInput,
    BillReminderInput,
    CategoryInput,
    MovementInput,
)
from pocketledger.domain.models.ledger import (
    AccountData,
    AccountDraft,
    BillReminderData,
    BillReminderDraft,
    CategoryData,
    CategoryDraft,
    MovementData,
    MovementDraft,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _error_message(schema: type[BaseModel], field: str, error: dict) -> str:
    kind = error["type"]
    if kind == "missing":
        return schema.required_messages.get(field, f"{field} is required.")
    if kind == "value_error":
        return str(error["ctx"]["error"])
    if kind == "string_too_long":
        return (
            f"{field} may not be longer than "
            f"{error['ctx']['max_length']} characters."
        )
    return error["msg"]


def _parse(schema: type[SchemaT], payload: dict[str, Any]) -> SchemaT:
    """Validate a payload against a schema, mapping errors to field messages.

    Blank values are dropped first so they are reported as missing.

    Raises:
        ValidationError: With the first message reported for each field.
    """
    present = {key: value for key, value in payload.items() if not _is_blank(value)}
    try:
        return schema.model_validate(present)
    except SchemaValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "__all__"
            errors.setdefault(field, _error_message(schema, field, error))
        raise ValidationError(errors) from exc


def validate_movement_draft(draft: MovementDraft) -> MovementData:
    """Validate and normalize a movement draft.

    Args:
        draft: Raw movement input.

    Returns:
        MovementData: Normalized movement values.

    Raises:
        ValidationError: If any field is missing or malformed.
    """
    parsed = _parse(
        MovementInput,
        {
            "category_id": draft.category_id,
            "account_id": draft.account_id,
            "type": draft.kind,
            "amount": draft.amount,
            "description": draft.description,
            "transaction_date": draft.movement_date,
            "to_account_id": draft.to_account_id,
        },
    )
    return MovementData(**parsed.model_dump())


def validate_account_draft(draft: AccountDraft) -> AccountData:
    """Validate and normalize an account draft."""
    return AccountData(**_parse(AccountInput, asdict(draft)).model_dump())


def validate_category_draft(draft: CategoryDraft) -> CategoryData:
    """Validate and normalize a category draft."""
    parsed = _parse(
        CategoryInput,
        {
            "name": draft.name,
            "icon": draft.icon,
            "color": draft.color,
            "type": draft.kind,
        },
    )
    return CategoryData(**parsed.model_dump())


def validate_bill_reminder_draft(draft: BillReminderDraft) -> BillReminderData:
    """Validate and normalize a bill reminder draft."""
    return BillReminderData(
        **_parse(BillReminderInput, asdict(draft)).model_dump()
    )


__all__ = [
    "validate_movement_draft",
    "validate_account_draft",
    "validate_category_draft",
    "validate_bill_reminder_draft",
]
