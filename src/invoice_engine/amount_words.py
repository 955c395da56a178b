"""
Amount in words using the Indian numbering system.

Groups are hundreds, thousand, lakh (1,00,000) and crore (1,00,00,000).
Counts of crore larger than 99 are spelled out with the same rules, so
10,00,00,00,000 reads "One Thousand Crore".
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, List

from .money import RUPEE, to_rupees

ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def _below_hundred(n: int) -> str:
    if n < 20:
        return ONES[n]
    tens, units = divmod(n, 10)
    return f"{TENS[tens]} {ONES[units]}" if units else TENS[tens]


def _below_thousand(n: int) -> str:
    hundreds, rest = divmod(n, 100)
    words = []
    if hundreds:
        words.append(f"{ONES[hundreds]} Hundred")
    if rest:
        words.append(_below_hundred(rest))
    return " ".join(words)


def _indian_words(n: int) -> List[str]:
    crore, rest = divmod(n, CRORE)
    lakh, rest = divmod(rest, LAKH)
    thousand, rest = divmod(rest, THOUSAND)

    words: List[str] = []
    if crore:
        words.extend(_indian_words(crore))
        words.append("Crore")
    if lakh:
        words.extend([_below_hundred(lakh), "Lakh"])
    if thousand:
        words.extend([_below_hundred(thousand), "Thousand"])
    if rest:
        words.append(_below_thousand(rest))
    return words


def whole_rupees(amount: Any) -> int:
    """Whole rupees to spell.

    Python ints and finite Decimals (such as a computed grand total) are
    taken exactly at any size; everything else goes through to_rupees.
    """
    if isinstance(amount, int) and not isinstance(amount, bool):
        return max(amount, 0)
    if isinstance(amount, Decimal) and amount.is_finite():
        if amount <= 0:
            return 0
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, amount.adjusted() + 3)
            return int(amount.quantize(RUPEE, rounding=ROUND_HALF_UP))
    return to_rupees(amount)


def amount_to_words(amount: Any) -> str:
    """Spell a rupee amount in words, e.g. 12345678 ->
    "One Crore Twenty Three Lakh Forty Five Thousand Six Hundred Seventy Eight".

    Paise are rounded away (half-up); negative or malformed amounts read
    "Zero".
    """
    rupees = whole_rupees(amount)
    if rupees == 0:
        return "Zero"
    return " ".join(_indian_words(rupees))


def rupees_in_words(amount: Any) -> str:
    """Line printed on the invoice: "<words> Rupees Only"."""
    return f"{amount_to_words(amount)} Rupees Only"
