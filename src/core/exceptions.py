# core/exceptions.py

from typing import Optional


class EngineError(Exception):
    """Base class for every error raised by the test execution engine."""


class LookupFailedError(EngineError):
    """A referenced document could not be loaded."""

    entity = "Document"

    def __init__(self, entity_id: Optional[str] = None, message: Optional[str] = None):
        self.entity_id = entity_id
        super().__init__(message or f"{self.entity} not found")


class CollectionNotFoundError(LookupFailedError):
    entity = "Test collection"


class TestCaseNotFoundError(LookupFailedError):
    entity = "Test case"


class InterfaceNotFoundError(LookupFailedError):
    entity = "Interface"


class ProjectNotFoundError(LookupFailedError):
    entity = "Project"


class VariableResolutionError(EngineError):
    """Raised by the resolver in strict mode for an unresolvable reference."""

    def __init__(self, reference: str, reason: str):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Cannot resolve '{reference}': {reason}")


class RequestExecutionError(EngineError):
    """Transport-level failure of an HTTP call (DNS, refused, timeout...)."""

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"HTTP request failed for {method} {url}: {reason}")
