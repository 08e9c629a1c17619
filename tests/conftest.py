"""Shared fixtures: a fake HTTP API behind httpx.MockTransport and JSON stores on tmp_path."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import pytest

from common.logger import LoggerFactory

BASE_URL = "http://api.test"


class FakeApi:
    """Tiny in-process API used instead of the network."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path, method = request.url.path, request.method

        if path == "/users" and method == "POST":
            payload = json.loads(request.content or b"{}")
            return httpx.Response(
                201,
                json={"id": 42, **payload},
                headers={"X-Request-Id": "req-1"},
            )
        if path == "/users/42" and method == "GET":
            return httpx.Response(200, json={"id": 42, "name": "Ada", "tags": ["a", "b"]})
        if path == "/users/42" and method == "DELETE":
            return httpx.Response(204)
        if path == "/echo":
            return httpx.Response(
                200,
                json={
                    "method": method,
                    "query": dict(request.url.params),
                    "headers": {k.lower(): v for k, v in request.headers.items()},
                    "body": request.content.decode() or None,
                },
            )
        if path == "/text":
            return httpx.Response(200, text="plain text", headers={"Content-Type": "text/plain"})
        if path == "/bad-json":
            return httpx.Response(
                200, content=b"{not json", headers={"Content-Type": "application/json"}
            )
        if path == "/down":
            raise httpx.ConnectError("connection refused", request=request)
        if path == "/slow":
            raise httpx.ReadTimeout("read timed out", request=request)
        return httpx.Response(404, json={"message": "not found"})

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture(autouse=True)
def _reset_loggers():
    yield
    LoggerFactory.clear_cache()


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def transport(fake_api: FakeApi) -> httpx.MockTransport:
    return httpx.MockTransport(fake_api)


def make_case(
    case_id: str,
    path: str,
    method: str = "GET",
    order: int = 0,
    enabled: bool = True,
    script: str = "",
    interface_id: str = "if-api",
    collection_id: str = "c1",
    **request: Any,
) -> Dict[str, Any]:
    """Test case document as stored in collections.json (id is the dict key)."""
    return {
        "collection_id": collection_id,
        "interface_id": interface_id,
        "name": f"case {case_id}",
        "request": {"method": method, "path": path, **request},
        "assertion_script": script,
        "order": order,
        "enabled": enabled,
    }


def write_stores(
    data_dir: Path,
    test_cases: Dict[str, Dict[str, Any]],
    environments: Optional[List[Dict[str, Any]]] = None,
) -> Path:
    """Write projects.json and collections.json for a single demo project."""
    data_dir.mkdir(parents=True, exist_ok=True)
    if environments is None:
        environments = [
            {
                "name": "default",
                "base_url": "api.test/",
                "variables": {"userId": 42},
                "headers": {"X-Env": "default"},
            },
            {
                "name": "staging",
                "base_url": "https://staging.test",
                "headers": {"X-Env": "staging"},
            },
        ]
    projects = {
        "projects": {"p1": {"name": "Demo", "environments": environments}},
        "interfaces": {
            "if-api": {"project_id": "p1", "title": "Demo API", "path": "/"},
            "if-orphan": {"project_id": "gone", "title": "Orphan", "path": "/"},
        },
    }
    collections = {
        "collections": {
            "c1": {"project_id": "p1", "name": "Users flow"},
            "empty": {"project_id": "p1", "name": "Nothing here"},
        },
        "test_cases": test_cases,
    }
    (data_dir / "projects.json").write_text(json.dumps(projects), encoding="utf-8")
    (data_dir / "collections.json").write_text(json.dumps(collections), encoding="utf-8")
    return data_dir


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


def make_runner(data_dir: Path, transport: httpx.AsyncBaseTransport, hooks=None, strict=False):
    """TestCaseRunner wired to the JSON stores and the fake API."""
    from adapters.repository.json_file_project_repository import JsonFileProjectRepository
    from tools.core.assertion_evaluator import AssertionEvaluatorTool
    from tools.core.rest_api_caller import RestApiCallerTool
    from tools.core.test_case_runner import TestCaseRunner
    from tools.core.variable_resolver import VariableResolver

    return TestCaseRunner(
        project_repository=JsonFileProjectRepository(data_dir),
        resolver=VariableResolver(strict=strict),
        http_client=RestApiCallerTool(transport=transport),
        evaluator=AssertionEvaluatorTool(config={"timeout": 2}),
        hooks=hooks,
    )
