"""
Invoice Engine - GST tax & totals, invoice numbering, amount in words.

The calculation core is pure: it has no knowledge of storage, rendering
or transport.
"""

__version__ = "0.1.0"

from .amount_words import amount_to_words, rupees_in_words
from .errors import (
    ConflictError,
    DuplicateInvoiceNumberError,
    InvalidInvoiceInputError,
    InvoiceEngineError,
)
from .formatting import format_currency, format_invoice_date
from .models import (
    EnrichedLineItem,
    Invoice,
    InvoiceTotals,
    JurisdictionPair,
    LineItem,
    NumberAllocation,
    PaymentSummary,
    SequenceCounter,
    TotalsResult,
)
from .numbering import make_invoice_no
from .sequence_service import InvoiceNumberingService, next_sequence
from .tax_calculation import (
    apply_discount,
    compute_totals,
    outstanding,
    reconcile_payment,
)

__all__ = [
    "ConflictError",
    "DuplicateInvoiceNumberError",
    "EnrichedLineItem",
    "InvalidInvoiceInputError",
    "Invoice",
    "InvoiceEngineError",
    "InvoiceNumberingService",
    "InvoiceTotals",
    "JurisdictionPair",
    "LineItem",
    "NumberAllocation",
    "PaymentSummary",
    "SequenceCounter",
    "TotalsResult",
    "amount_to_words",
    "apply_discount",
    "compute_totals",
    "format_currency",
    "format_invoice_date",
    "make_invoice_no",
    "next_sequence",
    "outstanding",
    "reconcile_payment",
    "rupees_in_words",
]
