"""Calendar helpers for dashboard periods."""

import calendar
from datetime import date

from pocketledger.domain.errors import ValidationError
from pocketledger.domain.models.dashboard import DateRange

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def month_range(year: int, month: int) -> DateRange:
    """Return the first and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(start=date(year, month, 1), end=date(year, month, last_day))


def current_month_range(today: date) -> DateRange:
    """Return the calendar month containing ``today``."""
    return month_range(today.year, today.month)


def resolve_date_range(
    start_date: date | None,
    end_date: date | None,
    today: date,
) -> DateRange:
    """Fill missing bounds with the current month and check ordering.

    Args:
        start_date: Optional inclusive lower bound.
        end_date: Optional inclusive upper bound.
        today: Reference date for the default month.

    Returns:
        DateRange: Resolved inclusive range.

    Raises:
        ValidationError: If the start date is after the end date.
    """
    default = current_month_range(today)
    resolved = DateRange(
        start=start_date or default.start,
        end=end_date or default.end,
    )
    if resolved.start > resolved.end:
        raise ValidationError(
            {"start_date": "Start date must be on or before the end date."}
        )
    return resolved


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Return the (year, month) ``offset`` months away."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def last_months(today: date, months: int) -> list[tuple[int, int]]:
    """Return the last ``months`` calendar months ending with today's, oldest first."""
    return [
        shift_month(today.year, today.month, -offset)
        for offset in range(months - 1, -1, -1)
    ]


def month_label(year: int, month: int) -> str:
    """Return a short English label such as ``Jan 2024`` whatever the locale."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"


__all__ = [
    "month_range",
    "current_month_range",
    "resolve_date_range",
    "shift_month",
    "last_months",
    "month_label",
]
