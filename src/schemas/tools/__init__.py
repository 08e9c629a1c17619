# schemas/tools/__init__.py

from schemas.tools.assertion_evaluator import (
    AssertionEvaluatorInput,
    AssertionEvaluatorOutput,
)

from schemas.tools.rest_api_caller import (
    RestApiCallerInput,
    RestApiCallerOutput,
    RestRequest,
    RestResponse,
)

__all__ = [
    "AssertionEvaluatorInput",
    "AssertionEvaluatorOutput",
    "RestApiCallerInput",
    "RestApiCallerOutput",
    "RestRequest",
    "RestResponse",
]
