from __future__ import annotations

import hmac
import logging
from functools import wraps
from typing import Any

from flask import current_app, jsonify, request

from ..core.exceptions import (
    AlreadyCompleted,
    AuthorizationError,
    DomainError,
    NoActiveShift,
    PersistenceFailure,
    RecordNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (RecordNotFound, 404),
    (NoActiveShift, 409),
    (AlreadyCompleted, 409),
    (PersistenceFailure, 503),
)


def error_status(exc: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 400


def json_ok(data: Any = None, status: int = 200, **extra):
    body = {"success": True, "data": data}
    body.update(extra)
    return jsonify(body), status


def json_error(message: str, status: int, *, error: str | None = None):
    body = {"success": False, "message": message}
    if error:
        body["error"] = error
    return jsonify(body), status


def api_view(view):
    """Render domain errors as JSON with a matching status; anything else is a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return json_error(str(e), error_status(e), error=type(e).__name__)
        except Exception:
            logger.exception("unhandled error in %s", request.path)
            return json_error("Internal server error", 500)

    return wrapper


def admin_required(view):
    """Single shared admin token sent as X-Admin-Token."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        expected = current_app.config.get("ADMIN_TOKEN") or ""
        supplied = request.headers.get("X-Admin-Token") or ""
        if not expected or not hmac.compare_digest(expected.encode(), supplied.encode()):
            raise AuthorizationError("Admin privileges required")
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
