"""
Receivables
Outstanding amounts per customer and the receivables ageing report.

Only open invoices count: drafts and paid invoices are skipped. Totals are
recomputed from each invoice's items rather than read from storage.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from . import engine_config as cfg
from .models import AgingEntry, AgingReport, CustomerAging, Invoice
from .money import ZERO
from .tax_calculation import compute_invoice_totals, outstanding

WALK_IN_ID = "walk-in"
WALK_IN_NAME = "Walk-in Customer"

_CLOSED_STATUSES = {cfg.STATUS_PAID, cfg.STATUS_DRAFT}


def is_open(invoice: Invoice) -> bool:
    return invoice.status not in _CLOSED_STATUSES


def invoice_outstanding(invoice: Invoice, seller_state: Any) -> Decimal:
    """Balance due on one invoice (0 for drafts and paid invoices)."""
    if not is_open(invoice):
        return ZERO
    totals = compute_invoice_totals(invoice, seller_state).totals
    return outstanding(totals, invoice.amount_paid)


def customer_receivables(customer_id: str, invoices: Iterable[Invoice], seller_state: Any) -> Decimal:
    """Total outstanding for one customer."""
    return sum(
        (invoice_outstanding(inv, seller_state) for inv in invoices if inv.customer_id == customer_id),
        ZERO,
    )


def total_receivables(invoices: Iterable[Invoice], seller_state: Any) -> Decimal:
    """Total outstanding across every customer."""
    return sum((invoice_outstanding(inv, seller_state) for inv in invoices), ZERO)


def receivables_by_customer(
    customer_ids: Iterable[str],
    invoices: Iterable[Invoice],
    seller_state: Any,
) -> Dict[str, Decimal]:
    """Map of customer id to outstanding amount, zero for customers with none."""
    invoices = list(invoices)
    return {cid: customer_receivables(cid, invoices, seller_state) for cid in customer_ids}


def aging_bucket(days_overdue: int) -> str:
    """Bucket name for a number of days past due."""
    if days_overdue <= 0:
        return "current"
    for name, upper in cfg.AGING_BUCKETS:
        if days_overdue <= upper:
            return name
    return cfg.AGING_OVERFLOW_BUCKET


def aging_report(
    invoices: Iterable[Invoice],
    seller_state: Any,
    today: Optional[date] = None,
) -> AgingReport:
    """Group open balances by customer and by days overdue.

    Days overdue are counted from the due date, or the invoice date when
    there is no due date. Customers are sorted by total outstanding,
    largest first.
    """
    today = today or date.today()
    report = AgingReport(as_of=today)
    customers: Dict[str, CustomerAging] = {}

    for invoice in invoices:
        balance = invoice_outstanding(invoice, seller_state)
        if balance <= ZERO:
            continue

        customer_id = invoice.customer_id or WALK_IN_ID
        entry = customers.get(customer_id)
        if entry is None:
            entry = CustomerAging(
                customer_id=customer_id,
                customer_name=invoice.customer_name or WALK_IN_NAME,
            )
            customers[customer_id] = entry

        reference = invoice.due_date or invoice.invoice_date
        days_overdue = (today - reference).days if reference else 0
        bucket = aging_bucket(days_overdue)

        entry.invoices.append(AgingEntry(
            invoice_no=invoice.invoice_no,
            reference_date=reference,
            days_overdue=days_overdue,
            outstanding=balance,
        ))
        entry.total += balance
        entry.buckets[bucket] += balance

        report.total += balance
        report.buckets[bucket] += balance

    ordered: List[CustomerAging] = sorted(customers.values(), key=lambda c: c.total, reverse=True)
    report.customers = ordered
    return report
