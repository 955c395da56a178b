"""
API helper functions shared across route modules.
Maps engine error codes onto HTTP status codes.
"""
from typing import Any, Dict

from fastapi import HTTPException, status

from invoice_engine import errors

ERROR_STATUS = {
    errors.DUPLICATE_INVOICE_NUMBER: status.HTTP_409_CONFLICT,
    errors.CONFLICT: status.HTTP_409_CONFLICT,
    errors.INVALID_INVOICE_INPUT: status.HTTP_400_BAD_REQUEST,
}


def raise_for_result(result: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a successful tool result unchanged, or raise HTTPException.

    The engine's ``error`` / ``error_code`` envelope becomes the ``detail``
    of the HTTP error so clients can branch on the code.
    """
    if result.get("success"):
        return result

    from utils.logger import get_logger
    get_logger().log_rejection(result.get("error_code"), result.get("error"))

    raise HTTPException(
        status_code=ERROR_STATUS.get(result.get("error_code"), status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={
            "error": result.get("error"),
            "error_code": result.get("error_code"),
            "details": result.get("details", {}),
        },
    )
