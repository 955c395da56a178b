"""
Invoice Engine Configuration
Engine-level settings for numbering, jurisdictions and audit logging.
Loads environment variables and provides defaults.

This module does NOT import from the service-level src/config.py so the
engine can be used on its own.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Project root (two levels up from this file: src/invoice_engine/engine_config.py)
# ---------------------------------------------------------------------------
ENGINE_ROOT = Path(__file__).parent
PROJECT_ROOT = ENGINE_ROOT.parent.parent

_env_file = PROJECT_ROOT / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

# ---------------------------------------------------------------------------
# Invoice numbering
# ---------------------------------------------------------------------------
INVOICE_PREFIX: str = os.getenv("INVOICE_PREFIX", "INV").strip() or "INV"
INVOICE_SEQUENCE_WIDTH: int = int(os.getenv("INVOICE_SEQUENCE_WIDTH", "4"))

# Re-derive and retry this many times when a generated number collides
NUMBERING_MAX_RETRIES: int = int(os.getenv("NUMBERING_MAX_RETRIES", "1"))

# ---------------------------------------------------------------------------
# Seller (company) jurisdiction used when the caller does not pass one
# ---------------------------------------------------------------------------
COMPANY_STATE: str = os.getenv("COMPANY_STATE", "")

# ---------------------------------------------------------------------------
# Audit Logging
# ---------------------------------------------------------------------------
AUDIT_LOG_DIR: str = os.getenv(
    "INVOICE_ENGINE_AUDIT_LOG_DIR",
    str(PROJECT_ROOT / "logs" / "invoice_engine"),
)
AUDIT_LOG_MAX_MB: int = int(os.getenv("INVOICE_ENGINE_AUDIT_LOG_MAX_MB", "10"))
AUDIT_LOG_BACKUP_COUNT: int = int(os.getenv("INVOICE_ENGINE_AUDIT_LOG_BACKUP_COUNT", "5"))

# ---------------------------------------------------------------------------
# Receivables ageing buckets (upper bound in days overdue, inclusive)
# ---------------------------------------------------------------------------
AGING_BUCKETS = [
    ("days_1_30", 30),
    ("days_31_60", 60),
    ("days_61_90", 90),
]
AGING_OVERFLOW_BUCKET = "days_90_plus"

# ---------------------------------------------------------------------------
# Invoice statuses
# ---------------------------------------------------------------------------
STATUS_DRAFT = "draft"
STATUS_SENT = "sent"
STATUS_PAID = "paid"
VALID_STATUSES = {STATUS_DRAFT, STATUS_SENT, STATUS_PAID}

# ---------------------------------------------------------------------------
# GST state codes, used to resolve "19" / "19-West Bengal" to a state name
# ---------------------------------------------------------------------------
STATE_CODE_TO_NAME = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "26": "Dadra and Nagar Haveli and Daman and Diu",
    "27": "Maharashtra",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh",
    "38": "Ladakh",
    "97": "Other Territory",
}
