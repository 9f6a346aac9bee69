"""
Authentication request schemas.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from tracker.auth.types import DEFAULT_ROLE, ROLES


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError('must not be empty')
    return v


def _known_role(v: str) -> str:
    v = v.strip().lower()
    if v not in ROLES:
        raise ValueError(f'Role must be one of: {", ".join(sorted(ROLES))}')
    return v


class LoginRequest(BaseModel):
    """User login request."""
    username: str = Field(..., min_length=1, max_length=100, description="Username")
    password: str = Field(..., min_length=1, max_length=200, description="Password")

    @field_validator('username', 'password')
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v)


class RegisterRequest(BaseModel):
    """Self-service registration request."""
    username: str = Field(..., min_length=1, max_length=100, description="Username")
    password: str = Field(..., min_length=1, max_length=200, description="Password")
    role: Optional[str] = Field(default=DEFAULT_ROLE, description="User role")

    @field_validator('username', 'password')
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v: Optional[str]) -> str:
        """Validate role is allowed."""
        if v is None:
            return DEFAULT_ROLE
        return _known_role(v)


class ChangePasswordRequest(BaseModel):
    """Change password request."""
    old_password: str = Field(..., min_length=1, max_length=200, description="Current password")
    new_password: str = Field(..., min_length=1, max_length=200, description="New password")

    @field_validator('new_password')
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v)


class AssignRoleRequest(BaseModel):
    """Admin role assignment."""
    role: str = Field(..., description="New role")

    @field_validator('role')
    @classmethod
    def validate_role(cls, v: str) -> str:
        return _known_role(v)
