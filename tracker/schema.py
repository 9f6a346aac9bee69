"""
Database schema initialization.

IMPORTANT: initialize() should ONLY be called by:
- tracker/app.py at startup
- Test fixtures

Statements are idempotent; there is no migration tool.
"""
import logging

from core.db import Database, table_exists

logger = logging.getLogger(__name__)

USERS_TABLE = """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT UNIQUE NOT NULL CHECK (length(username) > 0),
        password_hash TEXT NOT NULL,
        role TEXT NOT NULL DEFAULT 'developer' CHECK (role IN ('admin', 'developer')),
        created_at TEXT DEFAULT CURRENT_TIMESTAMP,
        updated_at TEXT DEFAULT CURRENT_TIMESTAMP
    )
"""

DEVELOPERS_TABLE = """
    CREATE TABLE IF NOT EXISTS developers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL CHECK (length(name) > 0)
    )
"""

PROJECTS_TABLE = """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL CHECK (length(name) > 0),
        description TEXT NOT NULL DEFAULT '',
        active INTEGER NOT NULL DEFAULT 1
    )
"""

BUGS_TABLE = """
    CREATE TABLE IF NOT EXISTS bugs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL CHECK (length(title) > 0),
        description TEXT NOT NULL DEFAULT '',
        reported_by TEXT NOT NULL DEFAULT '',
        severity TEXT NOT NULL DEFAULT 'medium',
        developer_id INTEGER REFERENCES developers(id) ON DELETE SET NULL,
        project_id INTEGER REFERENCES projects(id) ON DELETE SET NULL,
        created_at TEXT DEFAULT CURRENT_TIMESTAMP
    )
"""

ALL_TABLES = (USERS_TABLE, DEVELOPERS_TABLE, PROJECTS_TABLE, BUGS_TABLE)
TABLE_NAMES = ("users", "developers", "projects", "bugs")


def initialize(db: Database) -> None:
    """Create all tables if they do not exist."""
    db.initialize(ALL_TABLES)


def missing_tables(db: Database) -> list[str]:
    """Names of expected tables that do not exist."""
    with db.connect() as conn:
        return [name for name in TABLE_NAMES if not table_exists(conn, name)]
