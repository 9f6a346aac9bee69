"""
Pydantic schemas for request validation.

These schemas provide centralized validation with clear error messages,
replacing scattered manual validation throughout route handlers.
"""

from typing import Type, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from core.errors import ValidationError
from tracker.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    ChangePasswordRequest,
    AssignRoleRequest,
)
from tracker.schemas.resources import (
    CreateBugRequest,
    UpdateBugRequest,
    AssignBugRequest,
    CreateDeveloperRequest,
    CreateProjectRequest,
)

M = TypeVar("M", bound=BaseModel)


def _describe(e: PydanticValidationError) -> str:
    first = e.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "body"
    message = first.get("msg", "invalid value").removeprefix("Value error, ")
    return f"{field}: {message}"


def parse_body(model: Type[M], allow_form: bool = False) -> M:
    """Validate the request body against a schema.

    Raises:
        ValidationError: Missing body or invalid fields (400)
    """
    data = request.get_json(silent=True)
    if data is None and allow_form and request.form:
        data = request.form.to_dict()

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(_describe(e)) from None


__all__ = [
    "parse_body",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "ChangePasswordRequest",
    "AssignRoleRequest",
    # Resources
    "CreateBugRequest",
    "UpdateBugRequest",
    "AssignBugRequest",
    "CreateDeveloperRequest",
    "CreateProjectRequest",
]
