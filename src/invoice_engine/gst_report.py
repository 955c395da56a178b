"""
GST period summary
Outward-supply totals for a filing period plus the HSN-wise summary.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable

from . import engine_config as cfg
from .models import INTRA_STATE, GstSummary, HsnSummaryRow, Invoice
from .tax_calculation import compute_invoice_totals


def in_period(invoice: Invoice, period: str) -> bool:
    """True when the invoice date falls in period ("YYYY-MM" or "YYYY")."""
    if invoice.invoice_date is None:
        return False
    return invoice.invoice_date.isoformat().startswith(period)


def gst_summary(invoices: Iterable[Invoice], seller_state: Any, period: str) -> GstSummary:
    """Sum taxable value and tax for every non-draft invoice in the period.

    Totals are taken before any invoice discount, which does not reduce
    tax liability.
    """
    summary = GstSummary(period=period)
    hsn_rows: Dict[str, HsnSummaryRow] = {}

    for invoice in invoices:
        if invoice.status == cfg.STATUS_DRAFT or not in_period(invoice, period):
            continue

        result = compute_invoice_totals(invoice, seller_state)
        totals = result.totals

        summary.invoice_count += 1
        summary.taxable += totals.taxable
        summary.cgst += totals.cgst
        summary.sgst += totals.sgst
        summary.igst += totals.igst
        if totals.tax_mode == INTRA_STATE:
            summary.intra_state_taxable += totals.taxable
        else:
            summary.inter_state_taxable += totals.taxable

        for row in result.rows:
            key = row.hsn or "NA"
            hsn_row = hsn_rows.setdefault(key, HsnSummaryRow(hsn=key))
            hsn_row.quantity += row.quantity
            hsn_row.taxable += row.taxable_value
            hsn_row.tax += row.tax_amount

    summary.hsn_summary = sorted(hsn_rows.values(), key=lambda r: r.hsn)
    return summary
