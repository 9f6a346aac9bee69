"""
Auth domain types - no dependencies on other auth modules.

NOTE: Keep this minimal. Only add types here if they are:
1. Used by 3+ auth submodules, AND
2. Would otherwise cause circular imports
"""
from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_DEVELOPER = "developer"

# Closed set; anything else is rejected at registration and in tokens
ROLES = frozenset({ROLE_ADMIN, ROLE_DEVELOPER})
DEFAULT_ROLE = ROLE_DEVELOPER


@dataclass(frozen=True)
class Identity:
    """Stored user record (immutable)."""
    id: int
    username: str
    password_digest: str
    role: str

    def __repr__(self) -> str:
        # digest stays out of logs and tracebacks
        return f"Identity(id={self.id!r}, username={self.username!r}, role={self.role!r})"


@dataclass(frozen=True)
class Claims:
    """Decoded token payload (immutable)."""
    subject: str
    role: str
    expires_at: datetime
    issued_at: datetime

    def to_dict(self) -> dict:
        return {
            "user": self.subject,
            "role": self.role,
            "expires": int(self.expires_at.timestamp()),
        }
