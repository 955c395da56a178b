"""
Invoice Numbering Audit Logger
Keeps an audit trail of every invoice number handed out, retried or
rejected. Structured JSON log format with file rotation.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from . import engine_config as cfg
from .errors import InvoiceEngineError
from .models import NumberAllocation, SequenceCounter

AUDIT_LOG_FILE = "invoice_numbering_audit.log"


class NumberingAuditLogger:
    """Audit trail for invoice number allocation and sequence commits."""

    def __init__(
        self,
        log_dir: Optional[str] = None,
        max_mb: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        self.log_dir = log_dir or cfg.AUDIT_LOG_DIR
        self.max_mb = max_mb or cfg.AUDIT_LOG_MAX_MB
        self.backup_count = backup_count or cfg.AUDIT_LOG_BACKUP_COUNT

        Path(self.log_dir).mkdir(parents=True, exist_ok=True)

        self._logger = self._create_logger()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def log_path(self) -> str:
        return os.path.join(self.log_dir, AUDIT_LOG_FILE)

    def log_allocation(self, allocation: NumberAllocation, invoice_date: Any = "") -> None:
        """Log a number handed out to a new invoice."""
        entry = self._entry("INFO", "ALLOCATED")
        entry.update(allocation.to_dict())
        entry["invoice_date"] = str(invoice_date or "")
        self._write(logging.INFO, entry)

    def log_retry(self, invoice_no: str, sequence: int, attempt: int) -> None:
        """Log a generated number that collided and is being re-derived."""
        entry = self._entry("WARNING", "RETRY")
        entry.update({"invoice_no": invoice_no, "sequence": sequence, "attempt": attempt})
        self._write(logging.WARNING, entry)

    def log_rejection(self, error: InvoiceEngineError) -> None:
        """Log a duplicate or conflict returned to the caller."""
        entry = self._entry("ERROR", "REJECTED")
        entry["error_code"] = error.error_code
        entry["message"] = error.message
        if error.details:
            entry["details"] = error.details
        self._write(logging.ERROR, entry)

    def log_commit(self, before: SequenceCounter, after: SequenceCounter) -> None:
        """Log a sequence counter write."""
        entry = self._entry("INFO", "COMMITTED")
        entry.update({
            "counter_before": before.value,
            "counter_after": after.value,
            "version_before": before.version,
            "version_after": after.version,
        })
        self._write(logging.INFO, entry)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _entry(level: str, event: str) -> Dict[str, Any]:
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
        }

    def _write(self, level: int, entry: Dict[str, Any]) -> None:
        self._logger.log(level, json.dumps(entry, ensure_ascii=False))

    def _create_logger(self) -> logging.Logger:
        """Create a structured rotating-file logger."""
        logger = logging.getLogger(f"invoice_numbering_audit_{id(self)}")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers.clear()

        handler = RotatingFileHandler(
            self.log_path,
            maxBytes=self.max_mb * 1024 * 1024,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(logging.DEBUG)
        # Entries are already JSON
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

        return logger

    def close(self) -> None:
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)
