"""
Display formatting for amounts and invoice dates.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from .money import quantize_paise, safe_decimal


def group_indian(digits: str) -> str:
    """Group an unsigned digit string the Indian way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value: Any, symbol: bool = True) -> str:
    """Format an amount as INR, e.g. 1234567.5 -> '₹12,34,567.50'.

    Malformed input formats as zero.
    """
    amount = quantize_paise(safe_decimal(value))
    sign = "-" if amount < 0 else ""
    whole, _, fraction = format(abs(amount), "f").partition(".")
    body = f"{group_indian(whole)}.{(fraction + '00')[:2]}"
    return f"{sign}{'₹' if symbol else ''}{body}"


def parse_date(value: Any) -> Optional[date]:
    """Accept a date, datetime or ISO string (YYYY-MM-DD[...]); None if unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def format_invoice_date(value: Any) -> str:
    """'15 Mar 2024' style; empty string when the date cannot be read."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return parsed.strftime("%d %b %Y")
