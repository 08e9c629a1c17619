# schemas/core/project.py

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class Interface(BaseModel):
    """HTTP endpoint definition owned by a project. Read-only during a run."""

    id: str = Field(..., description="Interface identifier")
    project_id: str = Field(..., description="Owning project")
    title: str = Field(default="", description="Human readable name")
    method: str = Field(default="GET", description="HTTP method")
    path: str = Field(..., description="Path template with {param} placeholders")
    query_schema: Dict[str, Any] = Field(default_factory=dict)
    header_schema: Dict[str, Any] = Field(default_factory=dict)
    body_schema: Dict[str, Any] = Field(default_factory=dict)
    status: str = Field(default="undone", description="Lifecycle status")


class Environment(BaseModel):
    """Named target environment: base URL plus default variables and headers."""

    name: str
    base_url: str = ""
    variables: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    is_default: bool = False


class Project(BaseModel):
    id: str
    name: str
    environments: List[Environment] = Field(default_factory=list)


class EnvironmentSelector(BaseModel):
    """Requested environment for a run; an empty name means "default"."""

    name: Optional[str] = None
