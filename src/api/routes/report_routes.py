"""
Report routes - receivables ageing and GST period summary.
Invoices are passed in by the caller; the engine recomputes their totals.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.helpers import raise_for_result
from invoice_engine import engine_tools

router = APIRouter()


class ReceivablesRequest(BaseModel):
    invoices: List[Dict[str, Any]] = Field(default_factory=list)
    seller_state: Optional[str] = None
    today: Optional[str] = Field(None, description="As-of date (YYYY-MM-DD); defaults to today")


class GstReportRequest(BaseModel):
    invoices: List[Dict[str, Any]] = Field(default_factory=list)
    period: str = Field(..., description="Filing period, YYYY-MM", examples=["2024-03"])
    seller_state: Optional[str] = None


@router.post(
    "/receivables",
    summary="Outstanding receivables with ageing buckets",
)
async def receivables(req: ReceivablesRequest):
    """Open (sent, unpaid) invoices grouped by customer and days overdue."""
    return engine_tools.receivables_report(
        req.invoices, seller_state=req.seller_state, today=req.today
    )


@router.post(
    "/gst",
    summary="GST totals and HSN summary for a period",
)
async def gst_report(req: GstReportRequest):
    """Taxable value, CGST/SGST/IGST and HSN table for non-draft invoices."""
    result = engine_tools.gst_period_report(
        req.invoices, req.period, seller_state=req.seller_state
    )
    return raise_for_result(result)
