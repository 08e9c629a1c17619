# tools/core/__init__.py

from tools.core.assertion_evaluator import AssertionEvaluatorTool
from tools.core.collection_runner import CollectionRunner
from tools.core.rest_api_caller import RestApiCallerTool
from tools.core.test_case_runner import TestCaseRunner
from tools.core.variable_resolver import VariableResolver

__all__ = [
    "AssertionEvaluatorTool",
    "CollectionRunner",
    "RestApiCallerTool",
    "TestCaseRunner",
    "VariableResolver",
]
