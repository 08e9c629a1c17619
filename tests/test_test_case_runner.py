import pytest

from core.hooks import HookEvent, TestHookRegistry
from schemas.core.execution_record import ExecutionRecord
from schemas.core.project import EnvironmentSelector
from schemas.core.test_case import TestCase
from schemas.core.test_result import TestStatus

from conftest import make_case, make_runner, write_stores


def case(case_id="A", **kwargs):
    return TestCase(id=case_id, **make_case(case_id, **kwargs))


@pytest.fixture
def runner(data_dir, transport):
    write_stores(data_dir, {})
    return make_runner(data_dir, transport)


async def test_passed_case_records_request_and_response(runner):
    record = ExecutionRecord()
    result = await runner.run(
        case(path="/users/{userId}", script="assert.equal(body.name, 'Ada')"), record
    )

    assert result.status == TestStatus.PASSED
    assert result.request.url == "http://api.test/users/42"
    assert result.request.path_params == {"userId": 42}
    assert result.request.headers["X-Env"] == "default"
    assert result.response.status_code == 200
    assert result.assertion_result.passed is True
    assert result.error is None
    assert result.duration >= 0
    assert record.keys() == ["A"]
    assert record.find("A").response.body["name"] == "Ada"


async def test_case_headers_override_environment_headers(runner):
    result = await runner.run(
        case(path="/echo", headers={"X-Env": "mine"}),
        ExecutionRecord(),
        environment=EnvironmentSelector(name="staging"),
    )
    assert result.request.url == "https://staging.test/echo"
    assert result.response.body["headers"]["x-env"] == "mine"


async def test_fallback_rule_without_script(runner):
    ok = await runner.run(case(path="/users/42", method="DELETE"), ExecutionRecord())
    missing = await runner.run(case(path="/missing"), ExecutionRecord())

    assert ok.status == TestStatus.PASSED
    assert missing.status == TestStatus.FAILED
    assert missing.assertion_result.message == "No assertion script"


@pytest.mark.parametrize(
    "interface_id, message", [("if-nope", "Interface not found"), ("if-orphan", "Project not found")]
)
async def test_lookup_failures_end_in_error(runner, fake_api, interface_id, message):
    record = ExecutionRecord()
    result = await runner.run(case(path="/echo", interface_id=interface_id), record)

    assert result.status == TestStatus.ERROR
    assert result.error.message == message
    assert result.response is None
    assert len(record) == 0
    assert fake_api.requests == []


async def test_transport_error_still_records_the_request(runner):
    record = ExecutionRecord()
    result = await runner.run(case(path="/down", script="assert.ok(true)"), record)

    assert result.status == TestStatus.ERROR
    assert "connection refused" in result.error.message
    assert "RequestExecutionError" in result.error.stack
    assert result.assertion_result is None
    assert record.find("A").response is None


async def test_records_include_the_current_case(runner):
    record = ExecutionRecord()
    await runner.run(case("first", path="/users/42"), record)
    result = await runner.run(
        case(
            "second",
            path="/echo",
            script="assert.equal(records.length, 2); assert.equal(records[1].key, 'second')",
        ),
        record,
    )
    assert result.status == TestStatus.PASSED, result.assertion_result.message


async def test_failed_assertion_message(runner):
    result = await runner.run(
        case(path="/users/42", script="assert.equal(status, 201)"), ExecutionRecord()
    )
    assert result.status == TestStatus.FAILED
    assert result.assertion_result.errors == ["Expected 201, but got 200"]


async def test_strict_resolution_error(data_dir, transport):
    write_stores(data_dir, {})
    runner = make_runner(data_dir, transport, strict=True)
    result = await runner.run(case(path="/echo", query={"id": "$.X.body.id"}), ExecutionRecord())
    assert result.status == TestStatus.ERROR
    assert "Cannot resolve '$.X.body.id'" in result.error.message


async def test_hooks_run_around_the_case(data_dir, transport, fake_api):
    write_stores(data_dir, {})
    hooks = TestHookRegistry()
    seen = []

    @hooks.before_test
    def before(collection, test_case):
        seen.append(("before", test_case.id, len(fake_api.requests)))

    @hooks.after_test
    async def after(collection, test_case, result):
        seen.append(("after", test_case.id, result.status))

    def broken(collection, test_case, result):
        raise RuntimeError("token refresh failed")

    hooks.register(HookEvent.AFTER_TEST, broken)

    runner = make_runner(data_dir, transport, hooks=hooks)
    result = await runner.run(case(path="/users/42"), ExecutionRecord())

    assert seen == [("before", "A", 0), ("after", "A", TestStatus.PASSED)]
    assert result.status == TestStatus.PASSED
    assert result.hook_errors == ["after_test hook 'broken' failed: token refresh failed"]
