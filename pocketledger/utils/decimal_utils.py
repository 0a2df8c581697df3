"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

MONEY_QUANTUM = Decimal("0.01")
MINOR_UNITS = 100
# Amounts fit a DECIMAL(15, 2) column: at most 13 integer digits.
MONEY_LIMIT = Decimal("10000000000000")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    """Round a numeric value to currency precision (2 places, half up).

    Args:
        value: Raw numeric value.

    Returns:
        Decimal: Value quantized to cents.
    """
    return coerce_decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def to_minor_units(value) -> int:
    """Convert an amount to integer cents."""
    return int(quantize_money(value) * MINOR_UNITS)


def from_minor_units(value: int) -> Decimal:
    """Convert integer cents back to a 2-place Decimal."""
    return (Decimal(int(value)) / MINOR_UNITS).quantize(MONEY_QUANTUM)


__all__ = [
    "MONEY_QUANTUM",
    "MONEY_LIMIT",
    "coerce_decimal",
    "quantize_money",
    "to_minor_units",
    "from_minor_units",
]
