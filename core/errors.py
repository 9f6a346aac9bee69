"""
Centralized error handling for the Bug Tracker API.

Error Hierarchy:
- APIError (4xx/503): Expected errors with messages safe to expose to clients
- InternalError (5xx): Unexpected errors - never expose internal details

Every error body has the same shape:
    {"status": "failure", "message": "...", "error_id": "1a2b3c4d"}

Usage:
    from core.errors import NotFoundError, ValidationError

    # For expected errors - raise with safe message
    raise NotFoundError(f"Bug {bug_id} not found")

    # Anything else raised from a view is logged with an error id and
    # answered with a generic 500 by register_error_handlers.
"""

import logging
import uuid

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


# =============================================================================
# Exception Classes (Expected Errors)
# =============================================================================

class APIError(Exception):
    """
    Base class for expected API errors.
    Messages are safe to expose to clients.
    """
    status_code = 400

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(APIError):
    """Request validation failed (400)."""
    status_code = 400


class AuthenticationError(APIError):
    """Bad credentials or a missing, malformed or expired token (401)."""
    status_code = 401


Unauthorized = AuthenticationError


class PermissionDeniedError(APIError):
    """Authenticated but not allowed (403)."""
    status_code = 403


class NotFoundError(APIError):
    """Resource not found (404)."""
    status_code = 404


class ConflictError(APIError):
    """Resource conflict (409)."""
    status_code = 409


class StoreUnavailable(APIError):
    """Transient persistence failure (503). Safe for the client to retry."""
    status_code = 503


# =============================================================================
# Internal Error (5xx - Never Expose)
# =============================================================================

class InternalError(Exception):
    """
    Unexpected internal errors (5xx status codes).
    Message should NEVER be exposed to clients.
    """
    pass


# =============================================================================
# Response Helpers
# =============================================================================

def _new_error_id() -> str:
    return str(uuid.uuid4())[:8]


def failure_body(message: str, error_id: str = None) -> dict:
    """Uniform JSON body for every failed request."""
    body = {"status": "failure", "message": message}
    if error_id:
        body["error_id"] = error_id
    return body


def register_error_handlers(app):
    """
    Register Flask error handlers for the error hierarchy.

    Call this in your Flask app factory:
        from core.errors import register_error_handlers
        register_error_handlers(app)
    """

    @app.errorhandler(APIError)
    def handle_api_error(e):
        """Handle all APIError subclasses."""
        error_id = _new_error_id()
        logger.warning(f"API error: {e}", extra={'error_id': error_id})
        response = jsonify(failure_body(str(e), error_id))
        if e.status_code == 401:
            response.headers["WWW-Authenticate"] = "Bearer"
        return response, e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Routing errors (404, 405, 429, ...) keep their status but use the JSON shape."""
        return jsonify(failure_body(e.description or e.name)), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        """Anything else is a 500 with a generic message."""
        error_id = _new_error_id()
        logger.exception("Internal server error", extra={'error_id': error_id})
        return jsonify(failure_body("Internal server error", error_id)), 500
