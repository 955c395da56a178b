"""
Invoice Engine Errors
Typed, recoverable conditions surfaced to callers of the engine.

Malformed numeric input is never an error; it is coerced to zero by the
calculator. Only numbering and save-time preconditions raise.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

DUPLICATE_INVOICE_NUMBER = "DUPLICATE_INVOICE_NUMBER"
CONFLICT = "CONFLICT"
INVALID_INVOICE_INPUT = "INVALID_INVOICE_INPUT"
INTERNAL_ERROR = "INTERNAL_ERROR"


class InvoiceEngineError(Exception):
    """Base class for recoverable engine errors."""

    error_code = INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            d["details"] = self.details
        return d


class DuplicateInvoiceNumberError(InvoiceEngineError):
    """The invoice number already exists (case-insensitive)."""

    error_code = DUPLICATE_INVOICE_NUMBER

    def __init__(self, invoice_no: str, manual: bool = False):
        kind = "Manual invoice number" if manual else "Invoice number"
        super().__init__(
            f"{kind} '{invoice_no}' already exists",
            details={"invoice_no": invoice_no, "manual": manual},
        )
        self.invoice_no = invoice_no
        self.manual = manual


class ConflictError(InvoiceEngineError):
    """Optimistic-lock version mismatch on save."""

    error_code = CONFLICT

    def __init__(self, resource: str, expected_version: int, actual_version: int):
        super().__init__(
            f"{resource} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
            details={
                "resource": resource,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
        self.expected_version = expected_version
        self.actual_version = actual_version


class InvalidInvoiceInputError(InvoiceEngineError):
    """A caller passed a value the numbering functions cannot use."""

    error_code = INVALID_INVOICE_INPUT
