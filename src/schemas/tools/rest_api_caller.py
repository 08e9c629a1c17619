# schemas/tools/rest_api_caller.py

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from schemas.core import ToolInput, ToolOutput


class RestRequest(BaseModel):
    """Fully resolved HTTP request descriptor."""

    method: str = Field(..., description="HTTP method, e.g., GET, POST")
    url: str = Field(..., description="Absolute URL of the endpoint")
    headers: Dict[str, Any] = Field(default_factory=dict)
    query: Dict[str, Any] = Field(default_factory=dict)
    body: Any = Field(default=None, description="JSON-able body or raw text")


class RestResponse(BaseModel):
    """Captured HTTP response."""

    status_code: int = Field(..., description="HTTP status code")
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Any = Field(default=None, description="Parsed JSON or text response")
    duration: float = Field(..., description="Round trip time in milliseconds")


class RestApiCallerInput(ToolInput):
    request: RestRequest = Field(..., description="Details of the HTTP request")
    timeout: Optional[float] = Field(
        default=None, description="Request timeout in seconds"
    )


class RestApiCallerOutput(ToolOutput):
    request: RestRequest
    response: RestResponse
