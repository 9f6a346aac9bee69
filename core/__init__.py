"""
Core shared utilities for the bug tracker.

- core.db: SQLite connection management
- core.errors: API error hierarchy and Flask error handlers
"""

from .errors import (
    APIError,
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    PermissionDeniedError,
    StoreUnavailable,
    Unauthorized,
    ValidationError,
)
from .db import Database, connect

__all__ = [
    "APIError",
    "AuthenticationError",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "PermissionDeniedError",
    "StoreUnavailable",
    "Unauthorized",
    "ValidationError",
    "Database",
    "connect",
]
