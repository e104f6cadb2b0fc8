"""Flask helpers shared by the feature controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import has_request_context, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    ExternalServiceError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
    (ExternalServiceError, 502),
)


def error_response(e: DomainError):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
    body: dict[str, Any] = {"success": False, "message": str(e)}
    if isinstance(e, ValidationError) and e.field:
        body["field"] = e.field
    if isinstance(e, ExternalServiceError):
        if e.status_code is not None and 400 <= e.status_code < 500:
            # Backend rejected the request: its 4xx status is passed through.
            status = e.status_code
        else:
            body["retryable"] = True
            logger.warning("Backend call failed: %s", e)
    return jsonify(body), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def session_token() -> Optional[str]:
    if not has_request_context():
        return None
    return session.get("token")


def session_role() -> Optional[Role]:
    if not has_request_context() or "role" not in session:
        return None
    return Role(session["role"])


def payload() -> dict:
    """JSON body or submitted form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def pick(data: dict, *names: str, default: Any = None) -> Any:
    """First present value among alternative field names (snake_case or the backend's camelCase)."""
    for name in names:
        if name in data and data[name] not in (None, ""):
            return data[name]
    return default


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
