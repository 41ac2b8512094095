"""Null-safe arithmetic rules."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from core.constants import DECIMAL_SCALE

_QUANTUM = Decimal(1).scaleb(-DECIMAL_SCALE)


def safe_divide(
    numerator: Decimal | int | None,
    denominator: Decimal | int | None,
) -> Decimal | None:
    """Divide two numbers, returning ``None`` instead of failing.

    Args:
        numerator: Dividend, possibly ``None``.
        denominator: Divisor, possibly ``None`` or zero.

    Returns:
        Quotient rounded half-up to the configured decimal scale, or
        ``None`` when either operand is missing or the divisor is zero.
    """
    if numerator is None or denominator is None or denominator == 0:
        return None
    quotient = Decimal(numerator) / Decimal(denominator)
    return quantize_amount(quotient)


def safe_multiply(left: Decimal | int | None, right: Decimal | int | None) -> Decimal | None:
    """Multiply two numbers, returning ``None`` when either is missing."""
    if left is None or right is None:
        return None
    return Decimal(left) * Decimal(right)


def quantize_amount(value: Decimal) -> Decimal:
    """Round a decimal half-up to the configured scale."""
    return value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)


def is_positive(value: Decimal | int | None) -> bool:
    """Return whether ``value`` is present and strictly positive."""
    return value is not None and value > 0
