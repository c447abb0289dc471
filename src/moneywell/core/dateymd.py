"""Dates stored as YYYYMMDD integers in MoneyWell documents."""

from datetime import date
from typing import Optional

from moneywell.core.exceptions import DateParseError


def parse_dateymd(value: Optional[int]) -> Optional[date]:
    """
    Parse an integer such as 20180602 into a date.

    Args:
        value: YYYYMMDD integer; 0 or None means "no date"

    Returns:
        The parsed date, or None when no date is set

    Raises:
        DateParseError: If the value is not a valid calendar date
    """
    if not value:
        return None

    text = str(value)
    if len(text) != 8 or not text.isdigit():
        raise DateParseError(value)

    try:
        return date(int(text[:4]), int(text[4:6]), int(text[6:]))
    except ValueError as e:
        raise DateParseError(value) from e


def format_dateymd(value: Optional[date]) -> int:
    """Inverse of parse_dateymd; None becomes 0."""
    if value is None:
        return 0
    return value.year * 10000 + value.month * 100 + value.day
