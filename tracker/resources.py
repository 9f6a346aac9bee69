"""
Bug, developer and project persistence.

Plain data access: rows come back as dicts, and the only rules enforced here
are the ones the schema needs (existing foreign keys, non-empty names).
"""
import logging
import sqlite3
from typing import Optional

from flask import current_app

from core.db import Database
from core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

BUG_FIELDS = ("title", "description", "reported_by", "severity", "developer_id", "project_id")


def _bug_dict(row) -> dict:
    return {
        "id": row["id"],
        "title": row["title"],
        "description": row["description"],
        "reported_by": row["reported_by"],
        "severity": row["severity"],
        "developer_id": row["developer_id"],
        "project_id": row["project_id"],
        "created_at": row["created_at"],
    }


def _integrity_error(e: sqlite3.IntegrityError) -> ValidationError:
    """Describe a constraint failure without echoing SQL."""
    logger.debug(f"Integrity error: {e}")
    detail = str(e).upper()
    if "FOREIGN KEY" in detail:
        return ValidationError("Referenced developer or project does not exist")
    if "NOT NULL" in detail:
        return ValidationError("Required bug field cannot be null")
    return ValidationError("Bug fields violate a storage constraint")


class BugStore:
    """Bug reports."""

    def __init__(self, db: Database):
        self.db = db

    def list_all(self) -> list[dict]:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM bugs ORDER BY id DESC")
            return [_bug_dict(row) for row in cursor.fetchall()]

    def get(self, bug_id: int) -> Optional[dict]:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM bugs WHERE id = ?", (bug_id,))
            row = cursor.fetchone()
        return _bug_dict(row) if row else None

    def create(self, fields: dict) -> dict:
        """Insert a bug. `fields` holds a subset of BUG_FIELDS including title."""
        columns = [name for name in BUG_FIELDS if name in fields]
        placeholders = ", ".join("?" for _ in columns)
        try:
            with self.db.connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"INSERT INTO bugs ({', '.join(columns)}) VALUES ({placeholders})",
                    tuple(fields[name] for name in columns)
                )
                bug_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise _integrity_error(e) from e
        return self.get(bug_id)

    def update(self, bug_id: int, changes: dict) -> dict:
        """Apply a partial update.

        Raises:
            NotFoundError: No bug with this id
        """
        columns = [name for name in BUG_FIELDS if name in changes]
        if columns:
            assignments = ", ".join(f"{name} = ?" for name in columns)
            try:
                with self.db.connect() as conn:
                    cursor = conn.cursor()
                    cursor.execute(
                        f"UPDATE bugs SET {assignments} WHERE id = ?",
                        (*(changes[name] for name in columns), bug_id)
                    )
                    updated = cursor.rowcount > 0
            except sqlite3.IntegrityError as e:
                raise _integrity_error(e) from e
            if not updated:
                raise NotFoundError(f"Bug {bug_id} not found")

        bug = self.get(bug_id)
        if bug is None:
            raise NotFoundError(f"Bug {bug_id} not found")
        return bug

    def delete(self, bug_id: int) -> bool:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM bugs WHERE id = ?", (bug_id,))
            return cursor.rowcount > 0

    def assign(self, bug_id: int, developer_id: int) -> dict:
        """Assign a bug to a developer.

        Raises:
            NotFoundError: Unknown bug or developer
        """
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT 1 FROM developers WHERE id = ?", (developer_id,))
            if cursor.fetchone() is None:
                raise NotFoundError(f"Developer {developer_id} not found")
            cursor.execute(
                "UPDATE bugs SET developer_id = ? WHERE id = ?",
                (developer_id, bug_id)
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Bug {bug_id} not found")
        return self.get(bug_id)


class DeveloperStore:
    """Developers that bugs can be assigned to."""

    def __init__(self, db: Database):
        self.db = db

    def list_all(self) -> list[dict]:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name FROM developers ORDER BY name")
            return [{"id": row["id"], "name": row["name"]} for row in cursor.fetchall()]

    def create(self, name: str) -> dict:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("INSERT INTO developers (name) VALUES (?)", (name,))
            return {"id": cursor.lastrowid, "name": name}


class ProjectStore:
    """Projects that bugs belong to."""

    def __init__(self, db: Database):
        self.db = db

    def list_all(self) -> list[dict]:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name, description, active FROM projects ORDER BY id")
            return [
                {
                    "id": row["id"],
                    "name": row["name"],
                    "description": row["description"],
                    "active": bool(row["active"]),
                }
                for row in cursor.fetchall()
            ]

    def create(self, name: str, description: str = "") -> dict:
        with self.db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO projects (name, description, active) VALUES (?, ?, 1)",
                (name, description)
            )
            return {"id": cursor.lastrowid, "name": name, "description": description, "active": True}


class ResourceStore:
    """All resource stores over one database."""

    def __init__(self, db: Database):
        self.bugs = BugStore(db)
        self.developers = DeveloperStore(db)
        self.projects = ProjectStore(db)


def get_resources() -> ResourceStore:
    """Resource stores of the current Flask app."""
    return current_app.extensions["resources"]
