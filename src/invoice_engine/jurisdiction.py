"""
Jurisdiction matching for the CGST/SGST vs IGST decision.
"""

from __future__ import annotations

import re
from typing import Any

from . import engine_config as cfg

# "19", "9", "19-West Bengal", "27 : Maharashtra"
_STATE_CODE_RE = re.compile(r"^(\d{1,2})\s*(?:[-:]\s*(.*))?$")


def normalize_jurisdiction(value: Any) -> str:
    """Return a comparable key for a state name or GST state code.

    State codes resolve to the state name, so "19", "19-West Bengal" and
    " west bengal " all compare equal. Returns "" when unknown.
    """
    if value is None:
        return ""
    text = str(value).strip()
    if not text:
        return ""

    match = _STATE_CODE_RE.match(text)
    if match:
        code = match.group(1).zfill(2)
        name = cfg.STATE_CODE_TO_NAME.get(code)
        if name:
            return name.casefold()
        if not match.group(2):
            return code
        text = match.group(2)

    return " ".join(text.split()).casefold()


def is_intra_state(buyer_state: Any, seller_state: Any) -> bool:
    """Return True when supply is intra-state.

    Either side unknown means inter-state.
    """
    buyer = normalize_jurisdiction(buyer_state)
    seller = normalize_jurisdiction(seller_state)
    return bool(buyer) and bool(seller) and buyer == seller
