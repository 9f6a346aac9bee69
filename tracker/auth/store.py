"""
User identity persistence.

The auth core only needs lookup-by-username and insert; password rotation
and role assignment are the two permitted mutations of an Identity.
"""
import logging
import sqlite3
from typing import Optional, Protocol

from core.db import Database
from core.errors import InternalError
from .types import Identity

logger = logging.getLogger(__name__)


class UsernameTaken(Exception):
    """The store already holds an identity with this username."""


class UserStore(Protocol):
    """
    Contract for identity lookup and registration.
    """
    def find_by_username(self, username: str) -> Optional[Identity]: ...
    def insert(self, username: str, password_digest: str, role: str) -> Identity: ...
    def update_password(self, username: str, password_digest: str) -> bool: ...
    def update_role(self, username: str, role: str) -> bool: ...


def _row_to_identity(row) -> Identity:
    return Identity(
        id=row["id"],
        username=row["username"],
        password_digest=row["password_hash"],
        role=row["role"],
    )


class SQLUserStore:
    """UserStore backed by the `users` table."""

    def __init__(self, db: Database):
        self.db = db

    def find_by_username(self, username: str) -> Optional[Identity]:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, username, password_hash, role FROM users WHERE username = ?",
                (username,)
            )
            row = cursor.fetchone()
        return _row_to_identity(row) if row else None

    def insert(self, username: str, password_digest: str, role: str) -> Identity:
        """Insert a new identity.

        Raises:
            UsernameTaken: If the username already exists
            InternalError: Any other constraint failure (e.g. an unknown role)
        """
        try:
            with self.db.connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "INSERT INTO users (username, password_hash, role) VALUES (?, ?, ?)",
                    (username, password_digest, role)
                )
                user_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e).upper():
                raise UsernameTaken(username) from e
            logger.error(f"User insert rejected by storage: {e}")
            raise InternalError("User insert failed") from e

        return Identity(id=user_id, username=username, password_digest=password_digest, role=role)

    def update_password(self, username: str, password_digest: str) -> bool:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE users SET password_hash = ?, updated_at = CURRENT_TIMESTAMP WHERE username = ?",
                (password_digest, username)
            )
            return cursor.rowcount > 0

    def update_role(self, username: str, role: str) -> bool:
        try:
            with self.db.connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "UPDATE users SET role = ?, updated_at = CURRENT_TIMESTAMP WHERE username = ?",
                    (role, username)
                )
                return cursor.rowcount > 0
        except sqlite3.IntegrityError as e:
            logger.error(f"Role update rejected by storage: {e}")
            raise InternalError("Role update failed") from e
