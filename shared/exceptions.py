"""Error taxonomy and the DRF exception handler rendering it.

Every error leaves the API as ``{"success": false, "message": ..., "errors": ...}``.
DRF's own exceptions cover validation (400), authorization (403) and lookup
(404) failures; the classes below add the domain specific cases.
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler, set_rollback  # type: ignore

logger = logging.getLogger(__name__)


class BookingConflictError(exceptions.ValidationError):
    """Raised when a write would double-book a vehicle."""

    default_detail = "Vehicle is not available for the selected dates"
    default_code = "booking_conflict"


class InvalidStateError(exceptions.APIException):
    """Raised for a status change the booking lifecycle does not allow."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Operation is not allowed in the current state"
    default_code = "invalid_state"


class ServerError(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server error"
    default_code = "server_error"


def _first_message(detail: Any) -> str | None:
    if isinstance(detail, (list, tuple)):
        for item in detail:
            message = _first_message(item)
            if message:
                return message
        return None
    if isinstance(detail, dict):
        for key in ("non_field_errors", "detail"):
            if key in detail:
                return _first_message(detail[key])
        return None
    return str(detail) if detail else None


def _envelope(exc: exceptions.APIException, data: Any) -> dict[str, Any]:
    if isinstance(exc, exceptions.ValidationError):
        if isinstance(data, dict) and set(data) - {"non_field_errors"}:
            return {
                "success": False,
                "message": _first_message(data) or "Validation failed",
                "errors": data,
            }
        return {"success": False, "message": _first_message(data) or "Validation failed"}
    return {"success": False, "message": _first_message(data) or "Request failed"}


def envelope_exception_handler(exc, context):
    """Wrap DRF error responses in the envelope; turn anything else into a 500."""

    response = exception_handler(exc, context)
    if response is not None:
        response.data = _envelope(exc, response.data)
        return response

    view = context.get("view")
    logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}")
    set_rollback()
    return Response(
        {"success": False, "message": str(ServerError.default_detail)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
