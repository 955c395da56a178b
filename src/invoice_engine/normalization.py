"""
Boundary normalization
Converts the loosely shaped invoice and line-item records produced by the
UI and storage layers into the canonical Invoice / LineItem dataclasses.

This is the only place that knows about alternate field names (nested
``customer`` objects vs flattened fields, camelCase vs snake_case). The
calculator only ever sees canonical objects.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from . import engine_config as cfg
from .formatting import parse_date
from .models import Invoice, LineItem

_QUANTITY_KEYS = ("quantity", "qty")
_RATE_KEYS = ("rate", "unit_price", "unitPrice", "price")
_TAX_KEYS = ("tax_percent", "taxPercent", "gst_rate", "gstRate")
_DESCRIPTION_KEYS = ("description", "productName", "product_name", "name")
_HSN_KEYS = ("hsn", "hsn_code", "hsnCode", "hsn_sac")
_PRODUCT_ID_KEYS = ("product_id", "productId")

_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "false", "no", "n", "off"}


def _first(record: Mapping[str, Any], keys: Iterable[str], default: Any = None) -> Any:
    """Value of the first key present with a non-None value."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _flag(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    return default


def _version(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def normalize_line_item(raw: Any) -> LineItem:
    """Canonical LineItem from a dict (any supported key style) or LineItem."""
    if isinstance(raw, LineItem):
        return raw
    if not isinstance(raw, Mapping):
        return LineItem()
    return LineItem(
        quantity=_first(raw, _QUANTITY_KEYS, 0),
        rate=_first(raw, _RATE_KEYS, 0),
        tax_percent=_first(raw, _TAX_KEYS, 0),
        description=_text(_first(raw, _DESCRIPTION_KEYS, "")),
        hsn=_text(_first(raw, _HSN_KEYS, "")),
        product_id=_text(_first(raw, _PRODUCT_ID_KEYS, "")),
    )


def normalize_line_items(raw_items: Optional[Iterable[Any]]) -> List[LineItem]:
    return [normalize_line_item(item) for item in raw_items or []]


def normalize_invoice(raw: Mapping[str, Any]) -> Invoice:
    """Canonical Invoice from a stored or submitted invoice record.

    Customer fields are read from a nested ``customer`` object first and
    then from the flattened invoice. A missing buyer state stays empty,
    which the calculator treats as inter-state.
    """
    customer = raw.get("customer")
    if not isinstance(customer, Mapping):
        customer = {}

    status = _text(raw.get("status")).lower()
    if status not in cfg.VALID_STATUSES:
        status = cfg.STATUS_DRAFT

    return Invoice(
        invoice_no=_text(_first(raw, ("invoice_no", "invoiceNo"), "")),
        invoice_date=parse_date(_first(raw, ("invoice_date", "invoiceDate", "date"))),
        due_date=parse_date(_first(raw, ("due_date", "dueDate"))),
        customer_id=_text(
            _first(customer, ("id",)) or _first(raw, ("customer_id", "customerId"), "")
        ),
        customer_name=_text(
            _first(customer, ("name",)) or _first(raw, ("customer_name", "customerName"), "")
        ),
        buyer_state=_text(
            _first(customer, ("state",))
            or _first(raw, ("place_of_supply", "placeOfSupply", "buyer_state", "state"), "")
        ),
        status=status,
        items=normalize_line_items(raw.get("items")),
        discount_amount=_first(raw, ("discount_amount", "discountAmount"), 0),
        amount_paid=_first(raw, ("amount_paid", "amountPaid"), 0),
        tax_enabled=_flag(_first(raw, ("tax_enabled", "taxEnabled"))),
        version=_version(raw.get("version", 0)),
    )


def normalize_invoices(raw_invoices: Optional[Iterable[Mapping[str, Any]]]) -> List[Invoice]:
    return [
        inv if isinstance(inv, Invoice) else normalize_invoice(inv)
        for inv in raw_invoices or []
    ]
