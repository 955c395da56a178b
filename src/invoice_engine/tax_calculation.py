"""
Tax & Totals Calculator
Turns line items plus buyer/seller jurisdictions into a reconciled GST
breakdown: taxable value, CGST/SGST or IGST, round-off and grand total.

Every function here is pure. Amounts are carried as integer paise and only
converted back to Decimal rupees when results are built, so identical
inputs always give identical outputs.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from . import engine_config as cfg
from .models import (
    EnrichedLineItem,
    Invoice,
    InvoiceTotals,
    JurisdictionPair,
    LineItem,
    PaymentSummary,
    TotalsResult,
)
from .money import (
    ZERO,
    from_paise,
    multiply,
    non_negative,
    percent_of_paise,
    quantize_paise,
    round_paise_to_rupee,
    to_paise,
)

ItemLike = Union[LineItem, Mapping[str, Any]]

_LINE_ITEM_FIELDS = ("quantity", "rate", "tax_percent", "description", "hsn", "product_id")


# ----------------------------------------------------------------------
# Line level
# ----------------------------------------------------------------------

def _as_line_item(item: ItemLike) -> LineItem:
    if isinstance(item, LineItem):
        return item
    if isinstance(item, Mapping):
        return LineItem(**{k: item[k] for k in _LINE_ITEM_FIELDS if k in item})
    return LineItem()


def _line_paise(item: LineItem, tax_enabled: bool) -> Tuple[EnrichedLineItem, int, int]:
    """Compute one row. Returns (row, taxable_paise, tax_paise)."""
    quantity = non_negative(item.quantity)
    rate = non_negative(item.rate)
    tax_percent = non_negative(item.tax_percent) if tax_enabled else ZERO

    taxable_paise = to_paise(multiply(quantity, rate))
    tax_paise = percent_of_paise(taxable_paise, tax_percent)

    row = EnrichedLineItem(
        quantity=quantity,
        rate=rate,
        tax_percent=tax_percent,
        taxable_value=from_paise(taxable_paise),
        tax_amount=from_paise(tax_paise),
        line_total=from_paise(taxable_paise + tax_paise),
        description=str(item.description or ""),
        hsn=str(item.hsn or ""),
        product_id=str(item.product_id or ""),
    )
    return row, taxable_paise, tax_paise


def compute_line(item: ItemLike, tax_enabled: bool = True) -> EnrichedLineItem:
    """Derive taxable value, tax and line total for a single item."""
    row, _, _ = _line_paise(_as_line_item(item), tax_enabled)
    return row


# ----------------------------------------------------------------------
# Invoice level
# ----------------------------------------------------------------------

def split_tax(total_tax_paise: int, intra_state: bool) -> Tuple[int, int, int]:
    """Split total tax (paise) into (cgst, sgst, igst).

    An odd paise under the intra-state split goes to CGST.
    """
    if not intra_state:
        return 0, 0, total_tax_paise
    sgst = total_tax_paise // 2
    return total_tax_paise - sgst, sgst, 0


def compute_totals(
    items: Optional[Iterable[ItemLike]],
    buyer_state: Any,
    seller_state: Any,
    tax_enabled: bool = True,
) -> TotalsResult:
    """Compute rows and reconciled totals for an invoice.

    Args:
        items: LineItem objects (or mappings with the same field names).
        buyer_state: Place of supply; empty means unknown (inter-state).
        seller_state: Company state.
        tax_enabled: When False every tax rate is treated as zero.

    Returns:
        TotalsResult with one EnrichedLineItem per input item.
    """
    jurisdictions = JurisdictionPair(
        buyer_state=str(buyer_state or ""),
        seller_state=str(seller_state or ""),
    )

    rows: List[EnrichedLineItem] = []
    taxable_paise = 0
    tax_paise = 0
    for item in items or []:
        row, line_taxable, line_tax = _line_paise(_as_line_item(item), tax_enabled)
        rows.append(row)
        taxable_paise += line_taxable
        tax_paise += line_tax

    cgst, sgst, igst = split_tax(tax_paise, jurisdictions.is_intra_state)

    unrounded = taxable_paise + tax_paise
    grand_total = round_paise_to_rupee(unrounded)

    totals = InvoiceTotals(
        taxable=from_paise(taxable_paise),
        total_tax=from_paise(tax_paise),
        cgst=from_paise(cgst),
        sgst=from_paise(sgst),
        igst=from_paise(igst),
        round_off=from_paise(grand_total - unrounded),
        grand_total=from_paise(grand_total),
        tax_mode=jurisdictions.tax_mode,
    )
    return TotalsResult(rows=rows, totals=totals)


# ----------------------------------------------------------------------
# Discount & payment
# ----------------------------------------------------------------------

def apply_discount(totals: InvoiceTotals, discount_amount: Any) -> InvoiceTotals:
    """Return new totals with a flat discount taken off the grand total.

    The discount is clamped to [0, grand total] and never touches the
    taxable value or tax fields. Applying a discount to totals that already
    carry one replaces it instead of stacking.
    """
    gross = totals.gross_total
    discount = quantize_paise(non_negative(discount_amount))
    if discount > gross:
        discount = gross
    return replace(totals, discount=discount, grand_total=gross - discount)


def outstanding(totals: InvoiceTotals, amount_paid: Any) -> Decimal:
    """Amount still due; never negative."""
    balance = totals.grand_total - quantize_paise(non_negative(amount_paid))
    return balance if balance > ZERO else ZERO


def resolve_status(requested_status: Any, grand_total: Decimal, amount_paid: Decimal) -> str:
    """Pick the invoice status implied by the amount paid.

    Full payment of a non-zero total marks the invoice paid; a requested
    'paid' with short payment falls back to 'sent'. A zero total (fully
    discounted) keeps whatever status was requested.
    """
    status = str(requested_status or "").strip().lower()
    if status not in cfg.VALID_STATUSES:
        status = cfg.STATUS_DRAFT

    if grand_total > ZERO and amount_paid >= grand_total:
        return cfg.STATUS_PAID
    if status == cfg.STATUS_PAID and amount_paid < grand_total:
        return cfg.STATUS_SENT
    return status


def reconcile_payment(
    totals: InvoiceTotals,
    amount_paid: Any,
    requested_status: Any = cfg.STATUS_SENT,
) -> PaymentSummary:
    """Summarise the payment position without discarding overpayment."""
    paid = quantize_paise(non_negative(amount_paid))
    overpaid_by = paid - totals.grand_total
    return PaymentSummary(
        grand_total=totals.grand_total,
        amount_paid=paid,
        outstanding=outstanding(totals, paid),
        overpaid_by=overpaid_by if overpaid_by > ZERO else ZERO,
        status=resolve_status(requested_status, totals.grand_total, paid),
    )


# ----------------------------------------------------------------------
# Canonical invoices
# ----------------------------------------------------------------------

def compute_invoice_totals(invoice: Invoice, seller_state: Any) -> TotalsResult:
    """Recompute a stored invoice from its items, discount included."""
    result = compute_totals(
        invoice.items,
        invoice.buyer_state,
        seller_state,
        tax_enabled=invoice.tax_enabled,
    )
    result.totals = apply_discount(result.totals, invoice.discount_amount)
    return result
