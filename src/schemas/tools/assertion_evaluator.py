# schemas/tools/assertion_evaluator.py

from typing import Any, Dict, List, Optional
from pydantic import Field

from schemas.core import ToolInput, ToolOutput


class AssertionEvaluatorInput(ToolInput):
    """Input schema for the sandboxed assertion evaluator."""

    script: str = Field(default="", description="JavaScript assertion source")
    status: Optional[int] = Field(default=None, description="Response status code")
    headers: Dict[str, Any] = Field(default_factory=dict, description="Response headers")
    body: Any = Field(default=None, description="Parsed response body")
    params: Dict[str, Any] = Field(default_factory=dict, description="Request query")
    records: List[Dict[str, Any]] = Field(
        default_factory=list, description="Execution record snapshot"
    )
    timeout: Optional[float] = Field(
        default=None, description="Maximum execution time in seconds"
    )


class AssertionEvaluatorOutput(ToolOutput):
    """Output schema for the sandboxed assertion evaluator."""

    passed: bool = Field(..., description="Whether every assertion held")
    message: str = Field(..., description="Summary or first failure message")
    errors: List[str] = Field(default_factory=list, description="Failure messages")
    logs: List[str] = Field(
        default_factory=list, description="Lines written through log/console"
    )
