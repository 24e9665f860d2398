import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
    default_code = "not_found"


class InvalidInput(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"
    default_code = "invalid_input"


class Unauthorized(APIException):
    """The resource exists but belongs to another user."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"
    default_code = "unauthorized"


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"
    default_code = "conflict"


def _flatten(detail):
    if isinstance(detail, list):
        return "; ".join(_flatten(d) for d in detail)
    if isinstance(detail, dict):
        return "; ".join(f"{k}: {_flatten(v)}" for k, v in detail.items())
    return str(detail)


def api_exception_handler(exc, context):
    """Render DRF errors with the {"ok": false, "error": ...} body every view returns."""
    response = exception_handler(exc, context)
    if response is None:
        return None
    if response.status_code >= 500:
        logger.error("Request failed: %s", exc)
    detail = getattr(exc, "detail", None)
    response.data = {"ok": False, "error": _flatten(detail) if detail is not None else str(exc)}
    return response
