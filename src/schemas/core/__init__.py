# schemas/core/__init__.py

from schemas.core.base_tool import ToolInput, ToolOutput
from schemas.core.project import Environment, EnvironmentSelector, Interface, Project
from schemas.core.test_case import TestCase, TestCaseRequest, TestCollection
from schemas.core.test_result import (
    AssertionResult,
    CapturedResponse,
    CollectionReport,
    ErrorInfo,
    ResolvedRequest,
    TestCaseRunResult,
    TestResult,
    TestStatus,
)
from schemas.core.execution_record import ExecutionRecord, RecordEntry

__all__ = [
    "ToolInput",
    "ToolOutput",
    "Environment",
    "EnvironmentSelector",
    "Interface",
    "Project",
    "TestCase",
    "TestCaseRequest",
    "TestCollection",
    "AssertionResult",
    "CapturedResponse",
    "CollectionReport",
    "ErrorInfo",
    "ResolvedRequest",
    "TestCaseRunResult",
    "TestResult",
    "TestStatus",
    "ExecutionRecord",
    "RecordEntry",
]
