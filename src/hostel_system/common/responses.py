from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (StorageUnavailableError, 503),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def error_response(exc: Exception, *, fallback: str = "Server error"):
    """Translate a service exception into the `{success: false}` JSON shape."""

    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            if status >= 500:
                logger.warning("Storage unavailable: %s", exc)
                return json_error("Storage temporarily unavailable. Please retry.", status)
            return json_error(str(exc), status)

    logger.exception("Unhandled error: %s", exc)
    return json_error(fallback, 500)
