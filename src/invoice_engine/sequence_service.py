"""
Invoice Sequence Service
Allocates invoice numbers from an explicit counter value and commits the
counter with a compare-and-swap on its version.

Concurrency is optimistic: nothing is locked. A generated number that
collides with an existing invoice is re-derived from the next sequence
value and retried; a manual number that collides is rejected.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

from . import engine_config as cfg
from .audit_logger import NumberingAuditLogger
from .errors import (
    ConflictError,
    DuplicateInvoiceNumberError,
    InvalidInvoiceInputError,
    InvoiceEngineError,
)
from .models import NumberAllocation, SequenceCounter
from .numbering import ensure_unique_invoice_no, is_invoice_no_unique, make_invoice_no

logger = logging.getLogger(__name__)

CounterLike = Union[SequenceCounter, int]


def _counter_value(counter: CounterLike) -> int:
    value = counter.value if isinstance(counter, SequenceCounter) else counter
    if isinstance(value, bool):
        raise InvalidInvoiceInputError(f"Invalid sequence counter: {value!r}")
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        raise InvalidInvoiceInputError(f"Invalid sequence counter: {value!r}") from None


def next_sequence(counter: CounterLike) -> int:
    """Sequence value the next new invoice should use."""
    return _counter_value(counter) + 1


def check_record_version(resource: str, current_version: int, expected_version: int) -> None:
    """Raise ConflictError when a record changed since it was read."""
    if current_version != expected_version:
        raise ConflictError(resource, expected_version, current_version)


class InvoiceNumberingService:
    """Hands out invoice numbers; never holds the counter itself."""

    def __init__(
        self,
        prefix: Optional[str] = None,
        max_retries: Optional[int] = None,
        audit_logger: Optional[NumberingAuditLogger] = None,
    ) -> None:
        self.prefix = prefix or cfg.INVOICE_PREFIX
        self.max_retries = cfg.NUMBERING_MAX_RETRIES if max_retries is None else max_retries
        self.audit = audit_logger

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def allocate(
        self,
        counter: CounterLike,
        invoice_date: Any,
        existing_numbers: Optional[Iterable[Any]] = None,
        manual_invoice_no: Optional[str] = None,
        prefix: Optional[str] = None,
    ) -> NumberAllocation:
        """Pick the number for a new invoice.

        Args:
            counter: Current persisted counter (value of the last used sequence).
            invoice_date: Invoice date, used for the YYYYMM component.
            existing_numbers: Every invoice number already saved.
            manual_invoice_no: User-entered number; skips generation.
            prefix: Overrides the service prefix.

        Returns:
            NumberAllocation; persist ``counter_after`` once the save succeeds.

        Raises:
            DuplicateInvoiceNumberError: manual number taken, or retries exhausted.
            InvalidInvoiceInputError: bad counter or date.
        """
        existing = list(existing_numbers or [])
        counter_value = _counter_value(counter)

        if manual_invoice_no is not None and str(manual_invoice_no).strip():
            return self._allocate_manual(manual_invoice_no, counter_value, existing, invoice_date)

        sequence = counter_value + 1
        attempt = 1
        while True:
            candidate = make_invoice_no(sequence, invoice_date, prefix or self.prefix)
            if is_invoice_no_unique(candidate, existing):
                allocation = NumberAllocation(
                    invoice_no=candidate,
                    sequence=sequence,
                    counter_after=sequence,
                    manual=False,
                    attempts=attempt,
                )
                logger.info("Allocated invoice number %s (sequence %d)", candidate, sequence)
                if self.audit:
                    self.audit.log_allocation(allocation, invoice_date)
                return allocation

            if attempt > self.max_retries:
                raise self._rejected(DuplicateInvoiceNumberError(candidate))

            logger.warning(
                "Invoice number %s already exists; retrying with sequence %d",
                candidate, sequence + 1,
            )
            if self.audit:
                self.audit.log_retry(candidate, sequence, attempt)
            sequence += 1
            attempt += 1

    def commit(
        self,
        counter: SequenceCounter,
        allocation: NumberAllocation,
        expected_version: int,
    ) -> SequenceCounter:
        """Return the counter to persist after a successful save.

        Raises:
            ConflictError: the stored counter moved since it was read.
        """
        if counter.version != expected_version:
            raise self._rejected(ConflictError("Invoice sequence", expected_version, counter.version))

        if allocation.counter_after <= counter.value:
            return counter

        updated = SequenceCounter(value=allocation.counter_after, version=counter.version + 1)
        logger.info("Invoice sequence advanced %d -> %d", counter.value, updated.value)
        if self.audit:
            self.audit.log_commit(counter, updated)
        return updated

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _allocate_manual(
        self,
        manual_invoice_no: str,
        counter_value: int,
        existing: list,
        invoice_date: Any,
    ) -> NumberAllocation:
        try:
            invoice_no = ensure_unique_invoice_no(manual_invoice_no, existing, manual=True)
        except DuplicateInvoiceNumberError as exc:
            raise self._rejected(exc)

        allocation = NumberAllocation(
            invoice_no=invoice_no,
            sequence=None,
            counter_after=counter_value,
            manual=True,
        )
        logger.info("Accepted manual invoice number %s", invoice_no)
        if self.audit:
            self.audit.log_allocation(allocation, invoice_date)
        return allocation

    def _rejected(self, error: InvoiceEngineError) -> InvoiceEngineError:
        logger.warning("%s: %s", error.error_code, error.message)
        if self.audit:
            self.audit.log_rejection(error)
        return error
