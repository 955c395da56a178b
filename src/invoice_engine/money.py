"""
Money helpers
Tolerant numeric coercion and paise arithmetic for the totals engine.

All engine arithmetic runs on integer paise; Decimal is only used to parse
inputs and to hand amounts back to callers.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

ZERO = Decimal("0")
PAISE = Decimal("0.01")
RUPEE = Decimal("1")

# Inputs at or beyond this magnitude are treated as malformed
MAX_INPUT = Decimal("1e15")

# Enough precision for MAX_INPUT x MAX_INPUT without rounding
_WORKING_PRECISION = 60


def safe_decimal(value: Any) -> Decimal:
    """Convert a number or numeric string to Decimal, returning 0 on failure.

    ``None``, booleans, ``NaN``, ``Infinity``, non-numeric strings and
    absurd magnitudes all become zero. Commas and the rupee sign are
    stripped from strings.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        # str() keeps the shortest repr, so 0.1 stays 0.1 instead of its binary expansion
        result = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.replace(",", "").replace("₹", "").strip()
        if not cleaned:
            return ZERO
        try:
            result = Decimal(cleaned)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not result.is_finite() or abs(result) >= MAX_INPUT:
        return ZERO
    return result


def non_negative(value: Any) -> Decimal:
    """safe_decimal clamped at zero."""
    result = safe_decimal(value)
    return result if result > ZERO else ZERO


def quantize_paise(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half-up."""
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return value.quantize(PAISE, rounding=ROUND_HALF_UP)


def to_paise(value: Decimal) -> int:
    """Decimal rupees -> integer paise, rounding half-up."""
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return int((value * 100).quantize(RUPEE, rounding=ROUND_HALF_UP))


def from_paise(paise: int) -> Decimal:
    """Integer paise -> Decimal rupees with exactly two places."""
    return Decimal(paise).scaleb(-2)


def round_paise_to_rupee(paise: int) -> int:
    """Round an amount in paise to whole rupees (still in paise), half-up."""
    sign = -1 if paise < 0 else 1
    return sign * (((abs(paise) + 50) // 100) * 100)


def multiply(a: Decimal, b: Decimal) -> Decimal:
    """Exact product of two bounded Decimals."""
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return a * b


def percent_of_paise(paise: int, percent: Decimal) -> int:
    """paise x percent / 100, rounded half-up to whole paise."""
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        share = Decimal(paise) * percent / 100
        return int(share.quantize(RUPEE, rounding=ROUND_HALF_UP))


def to_rupees(value: Any) -> int:
    """Round any amount to whole rupees, half-up. Malformed or negative -> 0."""
    amount = non_negative(value)
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return int(amount.quantize(RUPEE, rounding=ROUND_HALF_UP))
