# app/api/dto/__init__.py

from app.api.dto.test_dto import (
    RunCollectionRequest,
    RunTestCaseRequest,
    TestHistoryResponse,
)

__all__ = [
    "RunCollectionRequest",
    "RunTestCaseRequest",
    "TestHistoryResponse",
]
