from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateEmail,
    ExternalServiceError,
    NotFound,
    StateConflict,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ValidationError, 400),
    (DuplicateEmail, 409),
    (StateConflict, 409),
    (NotFound, 404),
    (ExternalServiceError, 503),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def ok(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status


def current_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def current_user_id() -> str:
    return str(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("Please log in to continue", 401)
            if session.get("role") not in allowed:
                return fail("You do not have permission to access this page", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status >= 500:
            logger.error("%s: %s", type(e).__name__, e)
        return fail(str(e), status)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return fail(e.description or e.name, e.code or 500)
        logger.exception("unhandled error")
        if bool(app.config.get("DEBUG", False)):
            return fail(f"Internal error: {e}", 500)
        return fail("Internal error", 500)
