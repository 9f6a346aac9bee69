"""
Database abstraction layer (DB-API 2.0 connection factory).

Thin connection management over sqlite3. NOT an ORM.

Every operation opens its own short-lived connection, so request threads
never share a cursor and no lock is needed around store calls.

Usage:
    from core.db import Database

    db = Database("/data/bugtrack.db")

    # Context manager (auto commit/rollback/close)
    with db.connect() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM users WHERE id = ?", (1,))
        row = cursor.fetchone()
"""

import logging
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Union

from .errors import StoreUnavailable

logger = logging.getLogger(__name__)

# Seconds to wait on a locked database before giving up
DEFAULT_TIMEOUT = 5.0


def get_connection(db_path: Union[str, Path], timeout: float = DEFAULT_TIMEOUT) -> sqlite3.Connection:
    """
    Get a DB-API 2.0 connection.

    Args:
        db_path: SQLite file path
        timeout: Busy timeout in seconds

    Returns:
        Connection with row_factory set for dict-like access.
    """
    conn = sqlite3.connect(str(db_path), timeout=timeout, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


@contextmanager
def connect(db_path: Union[str, Path], timeout: float = DEFAULT_TIMEOUT):
    """
    Context manager that yields a connection with auto commit/rollback.

    On success: commits and closes.
    On exception: rolls back and closes.

    sqlite3.OperationalError (locked, unreadable or missing database) is
    reported as StoreUnavailable. Other errors, including IntegrityError,
    propagate unchanged so callers can map them.
    """
    try:
        conn = get_connection(db_path, timeout=timeout)
    except sqlite3.OperationalError as e:
        logger.error(f"Database connection failed: {e}")
        raise StoreUnavailable("Storage temporarily unavailable") from e

    try:
        yield conn
        conn.commit()
    except sqlite3.OperationalError as e:
        conn.rollback()
        logger.error(f"Database operation failed: {e}")
        raise StoreUnavailable("Storage temporarily unavailable") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


_IDENTIFIER_RE = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')


def _validate_identifier(name: str, label: str) -> None:
    """Validate a SQL identifier (table or column name) against injection.

    Raises ValueError if the identifier contains invalid characters.
    """
    if not _IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid {label} name: {name!r}")


def table_exists(conn, table: str) -> bool:
    """Check if a table exists."""
    _validate_identifier(table, "table")
    cursor = conn.cursor()
    cursor.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
        (table,),
    )
    return cursor.fetchone() is not None


class Database:
    """
    Handle on one SQLite database file.

    Holds only the path; connections are opened per operation.
    """

    def __init__(self, db_path: Union[str, Path], timeout: float = DEFAULT_TIMEOUT):
        self.db_path = Path(db_path)
        self.timeout = timeout

    def connect(self):
        return connect(self.db_path, timeout=self.timeout)

    def initialize(self, statements: Iterable[str]) -> None:
        """Run idempotent DDL statements (CREATE ... IF NOT EXISTS)."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self.connect() as conn:
            cursor = conn.cursor()
            for statement in statements:
                cursor.execute(statement)
        logger.info(f"Database ready at {self.db_path}")

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self.connect() as conn:
                conn.execute("SELECT 1")
            return True
        except StoreUnavailable:
            return False
