# schemas/core/base_tool.py

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ToolInput(BaseModel):
    """Base schema for tool inputs."""

    metadata: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional metadata for the tool execution"
    )


class ToolOutput(BaseModel):
    """Base schema for tool outputs."""

    execution_time: Optional[float] = Field(
        default=None, description="Time taken for execution in seconds"
    )
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional metadata from the tool execution"
    )
