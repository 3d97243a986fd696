"""Shared parsing and formatting helpers."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

DISPLAY_DATE_FORMAT = "%d/%m/%Y"

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without going through binary float."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def try_decimal(text: str) -> Optional[Decimal]:
    """Parse text as a finite Decimal, or None."""
    try:
        value = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def as_date(value: Union[date, datetime]) -> date:
    """Drop the time part of a datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def format_display_date(value: Union[date, datetime]) -> str:
    """Format a date the way the booking form shows it (dd/mm/yyyy)."""
    return as_date(value).strftime(DISPLAY_DATE_FORMAT)
