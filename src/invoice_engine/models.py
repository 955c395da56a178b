"""
Invoice Engine Data Models
Dataclasses for structured data passing between engine components.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from . import engine_config as cfg
from .jurisdiction import is_intra_state, normalize_jurisdiction
from .money import ZERO

INTRA_STATE = "INTRA_STATE"
INTER_STATE = "INTER_STATE"


def _money(value: Decimal) -> float:
    return float(value)


# ---------------------------------------------------------------------------
# Line items
# ---------------------------------------------------------------------------

@dataclass
class LineItem:
    """A billable row as entered by the caller.

    Numeric fields are kept raw; the calculator coerces them.
    """
    quantity: Any = 0
    rate: Any = 0
    tax_percent: Any = 0
    description: str = ""
    hsn: str = ""
    product_id: str = ""


@dataclass
class EnrichedLineItem:
    """A line item with its derived amounts, each rounded to paise."""
    quantity: Decimal = ZERO
    rate: Decimal = ZERO
    tax_percent: Decimal = ZERO
    taxable_value: Decimal = ZERO
    tax_amount: Decimal = ZERO
    line_total: Decimal = ZERO
    description: str = ""
    hsn: str = ""
    product_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "description": self.description,
            "hsn": self.hsn,
            "quantity": float(self.quantity),
            "rate": float(self.rate),
            "tax_percent": float(self.tax_percent),
            "taxable_value": _money(self.taxable_value),
            "tax_amount": _money(self.tax_amount),
            "line_total": _money(self.line_total),
        }
        if self.product_id:
            d["product_id"] = self.product_id
        return d


# ---------------------------------------------------------------------------
# Jurisdictions and totals
# ---------------------------------------------------------------------------

@dataclass
class JurisdictionPair:
    """Buyer (place of supply) and seller state."""
    buyer_state: str = ""
    seller_state: str = ""

    @property
    def buyer_key(self) -> str:
        return normalize_jurisdiction(self.buyer_state)

    @property
    def seller_key(self) -> str:
        return normalize_jurisdiction(self.seller_state)

    @property
    def is_intra_state(self) -> bool:
        return is_intra_state(self.buyer_state, self.seller_state)

    @property
    def tax_mode(self) -> str:
        return INTRA_STATE if self.is_intra_state else INTER_STATE


@dataclass
class InvoiceTotals:
    """Reconciled invoice totals.

    Before a discount is applied,
    taxable + cgst + sgst + igst + round_off == grand_total exactly.
    """
    taxable: Decimal = ZERO
    total_tax: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    round_off: Decimal = ZERO
    grand_total: Decimal = ZERO
    discount: Decimal = ZERO
    tax_mode: str = INTER_STATE

    @property
    def unrounded_total(self) -> Decimal:
        return self.taxable + self.total_tax

    @property
    def gross_total(self) -> Decimal:
        """Grand total before any discount."""
        return self.grand_total + self.discount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "taxable": _money(self.taxable),
            "total_tax": _money(self.total_tax),
            "cgst": _money(self.cgst),
            "sgst": _money(self.sgst),
            "igst": _money(self.igst),
            "round_off": _money(self.round_off),
            "discount": _money(self.discount),
            "grand_total": _money(self.grand_total),
            "tax_mode": self.tax_mode,
        }


@dataclass
class TotalsResult:
    """Rows and totals returned by compute_totals."""
    rows: List[EnrichedLineItem] = field(default_factory=list)
    totals: InvoiceTotals = field(default_factory=InvoiceTotals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [r.to_dict() for r in self.rows],
            "totals": self.totals.to_dict(),
        }


@dataclass
class PaymentSummary:
    """Payment position of an invoice. amount_paid is never clamped."""
    grand_total: Decimal = ZERO
    amount_paid: Decimal = ZERO
    outstanding: Decimal = ZERO
    overpaid_by: Decimal = ZERO
    status: str = cfg.STATUS_DRAFT

    @property
    def is_overpaid(self) -> bool:
        return self.overpaid_by > ZERO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grand_total": _money(self.grand_total),
            "amount_paid": _money(self.amount_paid),
            "outstanding": _money(self.outstanding),
            "overpaid_by": _money(self.overpaid_by),
            "is_overpaid": self.is_overpaid,
            "status": self.status,
        }


# ---------------------------------------------------------------------------
# Invoice numbering
# ---------------------------------------------------------------------------

@dataclass
class SequenceCounter:
    """Value of the persisted invoice sequence plus its lock version."""
    value: int = 0
    version: int = 0


@dataclass
class NumberAllocation:
    """Outcome of allocating an invoice number.

    counter_after is what the caller persists once the save succeeds.
    """
    invoice_no: str = ""
    sequence: Optional[int] = None
    counter_after: int = 0
    manual: bool = False
    attempts: int = 1

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "invoice_no": self.invoice_no,
            "manual": self.manual,
            "counter_after": self.counter_after,
            "attempts": self.attempts,
        }
        if self.sequence is not None:
            d["sequence"] = self.sequence
        return d


# ---------------------------------------------------------------------------
# Canonical invoice record
# ---------------------------------------------------------------------------

@dataclass
class Invoice:
    """One invoice in canonical shape, produced by normalize_invoice."""
    invoice_no: str = ""
    invoice_date: Optional[date] = None
    due_date: Optional[date] = None
    customer_id: str = ""
    customer_name: str = ""
    buyer_state: str = ""
    status: str = cfg.STATUS_DRAFT
    items: List[LineItem] = field(default_factory=list)
    discount_amount: Any = 0
    amount_paid: Any = 0
    tax_enabled: bool = True
    version: int = 0


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

@dataclass
class AgingEntry:
    """An open invoice inside the ageing report."""
    invoice_no: str = ""
    reference_date: Optional[date] = None
    days_overdue: int = 0
    outstanding: Decimal = ZERO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "invoice_no": self.invoice_no,
            "reference_date": self.reference_date.isoformat() if self.reference_date else "",
            "days_overdue": self.days_overdue,
            "outstanding": _money(self.outstanding),
        }


def _empty_buckets() -> Dict[str, Decimal]:
    names = ["current"] + [name for name, _ in cfg.AGING_BUCKETS] + [cfg.AGING_OVERFLOW_BUCKET]
    return {name: ZERO for name in names}


@dataclass
class CustomerAging:
    """Outstanding amounts for one customer, split by days overdue."""
    customer_id: str = ""
    customer_name: str = ""
    total: Decimal = ZERO
    buckets: Dict[str, Decimal] = field(default_factory=_empty_buckets)
    invoices: List[AgingEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "customer_id": self.customer_id,
            "customer_name": self.customer_name,
            "total": _money(self.total),
            "buckets": {k: _money(v) for k, v in self.buckets.items()},
            "invoices": [e.to_dict() for e in self.invoices],
        }


@dataclass
class AgingReport:
    """Receivables ageing across all customers."""
    as_of: Optional[date] = None
    customers: List[CustomerAging] = field(default_factory=list)
    total: Decimal = ZERO
    buckets: Dict[str, Decimal] = field(default_factory=_empty_buckets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "as_of": self.as_of.isoformat() if self.as_of else "",
            "total": _money(self.total),
            "buckets": {k: _money(v) for k, v in self.buckets.items()},
            "customers": [c.to_dict() for c in self.customers],
        }


@dataclass
class HsnSummaryRow:
    """HSN-wise quantity, taxable value and tax."""
    hsn: str = "NA"
    quantity: Decimal = ZERO
    taxable: Decimal = ZERO
    tax: Decimal = ZERO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hsn": self.hsn,
            "quantity": float(self.quantity),
            "taxable": _money(self.taxable),
            "tax": _money(self.tax),
        }


@dataclass
class GstSummary:
    """GST totals for one filing period."""
    period: str = ""
    invoice_count: int = 0
    taxable: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    intra_state_taxable: Decimal = ZERO
    inter_state_taxable: Decimal = ZERO
    hsn_summary: List[HsnSummaryRow] = field(default_factory=list)

    @property
    def total_tax(self) -> Decimal:
        return self.cgst + self.sgst + self.igst

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "invoice_count": self.invoice_count,
            "taxable": _money(self.taxable),
            "cgst": _money(self.cgst),
            "sgst": _money(self.sgst),
            "igst": _money(self.igst),
            "total_tax": _money(self.total_tax),
            "intra_state_taxable": _money(self.intra_state_taxable),
            "inter_state_taxable": _money(self.inter_state_taxable),
            "hsn_summary": [r.to_dict() for r in self.hsn_summary],
        }
