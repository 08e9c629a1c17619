# application/services/test_execution_service.py

from typing import List, Optional

import httpx

from common.logger import LoggerFactory, LogLevel
from core.exceptions import TestCaseNotFoundError
from core.hooks import TestHookRegistry
from domain.ports.project_repository import ProjectRepositoryInterface
from domain.ports.test_collection_repository import TestCollectionRepositoryInterface
from domain.ports.test_result_repository import (
    DEFAULT_HISTORY_LIMIT,
    TestResultRepositoryInterface,
)
from schemas.core.execution_record import ExecutionRecord
from schemas.core.project import EnvironmentSelector
from schemas.core.test_result import CollectionReport, TestCaseRunResult, TestResult
from tools.core.assertion_evaluator import DEFAULT_SCRIPT_TIMEOUT, AssertionEvaluatorTool
from tools.core.collection_runner import CollectionRunner
from tools.core.rest_api_caller import DEFAULT_REQUEST_TIMEOUT, RestApiCallerTool
from tools.core.test_case_runner import TestCaseRunner
from tools.core.variable_resolver import VariableResolver
from utils.url_builder import DEFAULT_ENVIRONMENT_NAME


class TestExecutionService:
    """Service for running collections and single test cases and keeping their history."""

    def __init__(
        self,
        project_repository: ProjectRepositoryInterface,
        collection_repository: TestCollectionRepositoryInterface,
        result_repository: TestResultRepositoryInterface,
        hooks: Optional[TestHookRegistry] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        script_timeout: float = DEFAULT_SCRIPT_TIMEOUT,
        script_max_memory: Optional[int] = None,
        default_environment: str = DEFAULT_ENVIRONMENT_NAME,
        strict_resolution: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        verbose: bool = False,
    ):
        self.project_repository = project_repository
        self.collection_repository = collection_repository
        self.result_repository = result_repository
        self.hooks = hooks or TestHookRegistry(verbose=verbose)
        self.request_timeout = request_timeout
        self.script_timeout = script_timeout
        self.script_max_memory = script_max_memory
        self.default_environment = default_environment
        self.strict_resolution = strict_resolution
        self.transport = transport
        self.verbose = verbose
        self.logger = LoggerFactory.get_logger(
            name="service.test_execution",
            level=LogLevel.DEBUG if verbose else LogLevel.INFO,
        )

    def _build_case_runner(self) -> TestCaseRunner:
        return TestCaseRunner(
            project_repository=self.project_repository,
            resolver=VariableResolver(strict=self.strict_resolution, verbose=self.verbose),
            http_client=RestApiCallerTool(
                config={"timeout": self.request_timeout},
                verbose=self.verbose,
                transport=self.transport,
            ),
            evaluator=AssertionEvaluatorTool(
                config={
                    "timeout": self.script_timeout,
                    "max_memory": self.script_max_memory,
                },
                verbose=self.verbose,
            ),
            hooks=self.hooks,
            default_environment=self.default_environment,
            verbose=self.verbose,
        )

    async def run_collection(
        self,
        collection_id: str,
        environment: Optional[EnvironmentSelector] = None,
    ) -> CollectionReport:
        """Run a collection, then persist one result per executed test case."""
        runner = CollectionRunner(
            collection_repository=self.collection_repository,
            case_runner=self._build_case_runner(),
            verbose=self.verbose,
        )
        report = await runner.run(collection_id, environment)

        for result in report.results:
            await self.result_repository.create(
                TestResult.from_run(result, collection_id)
            )
        self.logger.info(
            f"Persisted {len(report.results)} result(s) for collection {collection_id}"
        )
        return report

    async def run_test_case(
        self,
        test_case_id: str,
        environment: Optional[EnvironmentSelector] = None,
    ) -> TestCaseRunResult:
        """Run a single test case with its own execution record and persist the result."""
        test_case = await self.collection_repository.get_test_case(test_case_id)
        if test_case is None:
            raise TestCaseNotFoundError(test_case_id)

        collection = await self.collection_repository.get_collection(
            test_case.collection_id
        )
        result = await self._build_case_runner().run(
            test_case, ExecutionRecord(), environment=environment, collection=collection
        )
        await self.result_repository.create(
            TestResult.from_run(result, test_case.collection_id)
        )
        return result

    async def get_history(
        self, collection_id: str, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> List[TestResult]:
        """Persisted results of a collection, newest first."""
        return await self.result_repository.list_by_collection(collection_id, limit)
