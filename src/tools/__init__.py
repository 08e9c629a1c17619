# tools/__init__.py

from tools.core import (
    AssertionEvaluatorTool,
    CollectionRunner,
    RestApiCallerTool,
    TestCaseRunner,
    VariableResolver,
)

__all__ = [
    "AssertionEvaluatorTool",
    "CollectionRunner",
    "RestApiCallerTool",
    "TestCaseRunner",
    "VariableResolver",
]
