"""
Bug, developer and project request schemas.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

Severity = Literal["low", "medium", "high", "critical"]


class CreateBugRequest(BaseModel):
    """New bug report."""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    reported_by: str = Field(default="", max_length=200)
    severity: Severity = "medium"
    developer_id: Optional[int] = None
    project_id: Optional[int] = None

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Title is required')
        return v

    @field_validator('severity', mode='before')
    @classmethod
    def lower_severity(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class UpdateBugRequest(BaseModel):
    """Partial bug update; only fields present in the body change."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    reported_by: Optional[str] = Field(None, max_length=200)
    severity: Optional[Severity] = None
    developer_id: Optional[int] = None
    project_id: Optional[int] = None

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError('Title cannot be null')
        v = v.strip()
        if not v:
            raise ValueError('Title is required')
        return v

    @field_validator('description', 'reported_by', 'severity')
    @classmethod
    def not_null(cls, v):
        # Only developer_id and project_id may be cleared
        if v is None:
            raise ValueError('cannot be null')
        return v

    @field_validator('severity', mode='before')
    @classmethod
    def lower_severity(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class AssignBugRequest(BaseModel):
    """Bug assignment."""
    bug_id: int = Field(..., ge=1)
    developer_id: int = Field(..., ge=1)


class CreateDeveloperRequest(BaseModel):
    """New developer."""
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Developer name is required')
        return v


class CreateProjectRequest(BaseModel):
    """New project."""
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Project name is required')
        return v
