"""
Invoice routes - totals, invoice numbers, sequence commit, amount in words.
These call the invoice engine's tool functions; nothing is stored here.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from api.helpers import raise_for_result
from invoice_engine import engine_tools

router = APIRouter()

# ── Pydantic models for request/response ──────────────────────────

class InvoiceTotalsRequest(BaseModel):
    """Invoice being edited, in the editor's own shape."""
    invoice: Dict[str, Any] = Field(
        ...,
        description="Items, customer or place of supply, discount, amount paid, status",
        examples=[{
            "customer": {"name": "Asha Traders", "state": "West Bengal"},
            "items": [{"description": "Battery", "qty": 2, "rate": 500, "taxPercent": 18}],
            "discountAmount": 0,
            "amountPaid": 0,
            "status": "draft",
        }],
    )
    seller_state: Optional[str] = Field(None, description="Company state; defaults to COMPANY_STATE")


class InvoiceNumberRequest(BaseModel):
    """Request to allocate a number for a new invoice."""
    counter_value: int = Field(0, ge=0, description="Last used sequence value")
    invoice_date: str = Field(..., description="Invoice date (YYYY-MM-DD)")
    existing_numbers: List[str] = Field(default_factory=list)
    prefix: Optional[str] = None
    manual_invoice_no: Optional[str] = None


class InvoiceNumberResponse(BaseModel):
    """Allocated invoice number."""
    success: bool
    invoice_no: str
    manual: bool
    counter_after: int
    attempts: int
    sequence: Optional[int] = None


class SequenceCommitRequest(BaseModel):
    """Compare-and-swap write of the invoice sequence counter."""
    stored_value: int = Field(..., ge=0)
    stored_version: int = Field(..., ge=0)
    expected_version: int = Field(..., ge=0)
    counter_after: int = Field(..., ge=0)


class SequenceCommitResponse(BaseModel):
    success: bool
    value: int
    version: int


# ── Routes ────────────────────────────────────────────────────────

@router.post(
    "/totals",
    summary="Recompute rows, GST split, round-off and grand total",
)
async def invoice_totals(req: InvoiceTotalsRequest):
    """
    Recompute an invoice from its line items.

    Same state for buyer and seller gives CGST + SGST; anything else
    (including an unknown buyer state) gives IGST.
    """
    return engine_tools.calculate_invoice(req.invoice, seller_state=req.seller_state)


@router.post(
    "/number",
    response_model=InvoiceNumberResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Allocate an invoice number",
)
async def invoice_number(req: InvoiceNumberRequest):
    """
    Allocate the number for a new invoice.

    Returns 409 with ``DUPLICATE_INVOICE_NUMBER`` when the number is taken;
    re-read the counter and retry, or pick another manual number.
    """
    result = engine_tools.generate_invoice_number(
        req.counter_value,
        req.invoice_date,
        existing_numbers=req.existing_numbers,
        prefix=req.prefix,
        manual_invoice_no=req.manual_invoice_no,
    )
    return raise_for_result(result)


@router.post(
    "/sequence/commit",
    response_model=SequenceCommitResponse,
    summary="Advance the invoice sequence counter",
)
async def commit_sequence(req: SequenceCommitRequest):
    """
    Advance the stored counter after a successful save.

    Returns 409 with ``CONFLICT`` when the stored version moved.
    """
    result = engine_tools.commit_invoice_sequence(
        req.stored_value,
        req.stored_version,
        req.expected_version,
        req.counter_after,
    )
    return raise_for_result(result)


@router.get(
    "/amount-in-words",
    summary="Spell an amount using lakh/crore grouping",
)
async def amount_in_words(
    amount: str = Query(..., description="Amount in rupees; paise are rounded"),
):
    """Words for the printed 'amount in words' line."""
    return engine_tools.amount_in_words(amount)
