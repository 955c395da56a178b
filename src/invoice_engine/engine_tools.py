"""
Engine Tool Endpoints
Dict-in / dict-out entry points used by the invoice editor, the save path
and the HTTP API: calculate_invoice, generate_invoice_number,
commit_invoice_sequence, amount_in_words, receivables_report and
gst_period_report.

Every result carries ``success``; failures add ``error`` and ``error_code``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from . import engine_config as cfg
from .amount_words import amount_to_words, rupees_in_words, whole_rupees
from .audit_logger import NumberingAuditLogger
from .errors import InvalidInvoiceInputError, InvoiceEngineError
from .formatting import format_currency, format_invoice_date, parse_date
from .gst_report import gst_summary
from .models import NumberAllocation, SequenceCounter
from .normalization import normalize_invoice, normalize_invoices
from .receivables import aging_report
from .sequence_service import InvoiceNumberingService
from .tax_calculation import compute_invoice_totals, reconcile_payment

_audit_logger: Optional[NumberingAuditLogger] = None


# ======================================================================
# Helpers
# ======================================================================

def get_audit_logger() -> NumberingAuditLogger:
    """Get or create the shared numbering audit logger."""
    global _audit_logger
    if _audit_logger is None:
        _audit_logger = NumberingAuditLogger()
    return _audit_logger


def _numbering_service(prefix: Optional[str] = None) -> InvoiceNumberingService:
    return InvoiceNumberingService(prefix=prefix, audit_logger=get_audit_logger())


# ======================================================================
# Tool 1: calculate_invoice
# ======================================================================

def calculate_invoice(
    payload: Mapping[str, Any],
    seller_state: Optional[str] = None,
) -> Dict[str, Any]:
    """Recompute an invoice being edited.

    Args:
        payload: Invoice record in any supported shape (items, customer or
            place of supply, discount, amount paid, status, tax toggle).
        seller_state: Company state; defaults to COMPANY_STATE.

    Returns:
        Rows, totals, payment position, amount in words and display strings.
    """
    invoice = normalize_invoice(payload)
    seller = cfg.COMPANY_STATE if seller_state is None else seller_state

    result = compute_invoice_totals(invoice, seller)
    totals = result.totals
    payment = reconcile_payment(totals, invoice.amount_paid, invoice.status)

    return {
        "success": True,
        "invoice_no": invoice.invoice_no,
        "rows": [row.to_dict() for row in result.rows],
        "totals": totals.to_dict(),
        "payment": payment.to_dict(),
        "amount_in_words": rupees_in_words(totals.grand_total),
        "display": {
            "date": format_invoice_date(invoice.invoice_date),
            "taxable": format_currency(totals.taxable),
            "cgst": format_currency(totals.cgst),
            "sgst": format_currency(totals.sgst),
            "igst": format_currency(totals.igst),
            "round_off": format_currency(totals.round_off),
            "discount": format_currency(totals.discount),
            "grand_total": format_currency(totals.grand_total),
            "outstanding": format_currency(payment.outstanding),
        },
    }


# ======================================================================
# Tool 2: generate_invoice_number
# ======================================================================

def generate_invoice_number(
    counter_value: int,
    invoice_date: Any,
    existing_numbers: Optional[Iterable[str]] = None,
    prefix: Optional[str] = None,
    manual_invoice_no: Optional[str] = None,
) -> Dict[str, Any]:
    """Allocate the number for a new invoice.

    A duplicate comes back as DUPLICATE_INVOICE_NUMBER; the caller either
    retries with a fresh counter value or asks for another manual number.
    """
    try:
        allocation = _numbering_service(prefix).allocate(
            counter_value,
            invoice_date,
            existing_numbers=existing_numbers,
            manual_invoice_no=manual_invoice_no,
        )
    except InvoiceEngineError as exc:
        return exc.to_dict()

    d: Dict[str, Any] = {"success": True}
    d.update(allocation.to_dict())
    return d


# ======================================================================
# Tool 3: commit_invoice_sequence
# ======================================================================

def commit_invoice_sequence(
    stored_value: int,
    stored_version: int,
    expected_version: int,
    counter_after: int,
) -> Dict[str, Any]:
    """Advance the persisted counter after a save, compare-and-swap style."""
    counter = SequenceCounter(value=stored_value, version=stored_version)
    allocation = NumberAllocation(counter_after=counter_after)
    try:
        updated = _numbering_service().commit(counter, allocation, expected_version)
    except InvoiceEngineError as exc:
        return exc.to_dict()
    return {"success": True, "value": updated.value, "version": updated.version}


# ======================================================================
# Tool 4: amount_in_words
# ======================================================================

def amount_in_words(amount: Any) -> Dict[str, Any]:
    """Words for the printed 'amount in words' line."""
    return {
        "success": True,
        "rupees": whole_rupees(amount),
        "words": amount_to_words(amount),
        "line": rupees_in_words(amount),
    }


# ======================================================================
# Tool 5: receivables_report
# ======================================================================

def receivables_report(
    invoices: Iterable[Mapping[str, Any]],
    seller_state: Optional[str] = None,
    today: Any = None,
) -> Dict[str, Any]:
    """Total receivables and the ageing report for stored invoices."""
    records = normalize_invoices(invoices)
    seller = cfg.COMPANY_STATE if seller_state is None else seller_state
    report = aging_report(records, seller, today=parse_date(today))
    d: Dict[str, Any] = {"success": True}
    d.update(report.to_dict())
    return d


# ======================================================================
# Tool 6: gst_period_report
# ======================================================================

def gst_period_report(
    invoices: Iterable[Mapping[str, Any]],
    period: str,
    seller_state: Optional[str] = None,
) -> Dict[str, Any]:
    """GST totals and HSN summary for one period ("YYYY-MM")."""
    if not str(period or "").strip():
        return InvalidInvoiceInputError("Period must not be empty").to_dict()
    records = normalize_invoices(invoices)
    seller = cfg.COMPANY_STATE if seller_state is None else seller_state
    d: Dict[str, Any] = {"success": True}
    d.update(gst_summary(records, seller, str(period).strip()).to_dict())
    return d
