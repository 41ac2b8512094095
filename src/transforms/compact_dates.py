"""Parsing rules for 8-digit ``YYYYMMDD`` integer dates."""

from __future__ import annotations

from datetime import date

from core.constants import COMPACT_DATE_LENGTH


def parse_compact_date(value: int | None) -> date | None:
    """Parse a ``YYYYMMDD`` integer, returning ``None`` when malformed.

    Only zero and the digit count are checked explicitly. Values that
    pass both checks but name no real calendar day also become ``None``
    because a ``date`` cannot hold them.

    Args:
        value: Raw integer date.

    Returns:
        Parsed date or ``None``.
    """
    if value is None or value == 0:
        return None
    digits = str(value)
    if len(digits) != COMPACT_DATE_LENGTH or not digits.isdigit():
        return None
    try:
        return date(int(digits[:4]), int(digits[4:6]), int(digits[6:]))
    except ValueError:
        return None
