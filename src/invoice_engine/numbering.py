"""
Invoice Number Generator
Builds {PREFIX}-{YYYYMM}-{sequence} identifiers, e.g. BPH-202403-0007.

The generator is deterministic and never touches the sequence counter;
see sequence_service for allocation and uniqueness.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from . import engine_config as cfg
from .errors import DuplicateInvoiceNumberError, InvalidInvoiceInputError
from .formatting import parse_date


def make_invoice_no(
    sequence: int,
    invoice_date: Any,
    prefix: Optional[str] = None,
    width: Optional[int] = None,
) -> str:
    """Return the invoice number for a sequence value and date.

    Numbers sharing a month sort lexically in sequence order as long as
    the sequence fits in ``width`` digits.

    Raises:
        InvalidInvoiceInputError: sequence below 1 or unreadable date.
    """
    if isinstance(sequence, bool) or not isinstance(sequence, int) or sequence < 1:
        raise InvalidInvoiceInputError(
            f"Invoice sequence must be an integer >= 1, got {sequence!r}"
        )
    parsed = parse_date(invoice_date)
    if parsed is None:
        raise InvalidInvoiceInputError(f"Invalid invoice date: {invoice_date!r}")

    prefix = (prefix or "").strip() or cfg.INVOICE_PREFIX
    width = width or cfg.INVOICE_SEQUENCE_WIDTH
    return f"{prefix}-{parsed.strftime('%Y%m')}-{sequence:0{width}d}"


def normalize_invoice_no(invoice_no: Any) -> str:
    """Comparison key for invoice numbers: trimmed and case-folded."""
    return str(invoice_no or "").strip().casefold()


def is_invoice_no_unique(candidate: Any, existing_numbers: Iterable[Any]) -> bool:
    """True when no existing number matches candidate, ignoring case."""
    key = normalize_invoice_no(candidate)
    return all(normalize_invoice_no(n) != key for n in existing_numbers)


def ensure_unique_invoice_no(
    candidate: Any,
    existing_numbers: Iterable[Any],
    manual: bool = False,
) -> str:
    """Return the trimmed candidate or raise DuplicateInvoiceNumberError."""
    invoice_no = str(candidate or "").strip()
    if not invoice_no:
        raise InvalidInvoiceInputError("Invoice number must not be empty")
    if not is_invoice_no_unique(invoice_no, existing_numbers):
        raise DuplicateInvoiceNumberError(invoice_no, manual=manual)
    return invoice_no
