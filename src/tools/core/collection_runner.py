# tools/core/collection_runner.py

import time
from datetime import datetime, timezone
from typing import Optional

from common.logger import LoggerFactory, LogLevel
from core.exceptions import CollectionNotFoundError
from domain.ports.test_collection_repository import TestCollectionRepositoryInterface
from schemas.core.execution_record import ExecutionRecord
from schemas.core.project import EnvironmentSelector
from schemas.core.test_result import CollectionReport, TestStatus
from tools.core.test_case_runner import TestCaseRunner


class CollectionRunner:
    """
    Runs the enabled test cases of a collection one after another.

    Cases run strictly in ascending ``order`` and share one execution record
    created for this run only, so later cases can reference the captured
    data of earlier ones. A case ending in ``error`` does not stop the run.
    """

    def __init__(
        self,
        collection_repository: TestCollectionRepositoryInterface,
        case_runner: TestCaseRunner,
        verbose: bool = False,
    ):
        self.collection_repository = collection_repository
        self.case_runner = case_runner
        self.logger = LoggerFactory.get_logger(
            name="tool.collection_runner",
            level=LogLevel.DEBUG if verbose else LogLevel.INFO,
        )

    async def run(
        self,
        collection_id: str,
        environment: Optional[EnvironmentSelector] = None,
    ) -> CollectionReport:
        collection = await self.collection_repository.get_collection(collection_id)
        if collection is None:
            raise CollectionNotFoundError(collection_id)

        test_cases = await self.collection_repository.list_test_cases(
            collection_id, enabled_only=True
        )
        test_cases = sorted(
            (case for case in test_cases if case.enabled), key=lambda case: case.order
        )

        self.logger.info(
            f"Running collection '{collection.name}' with {len(test_cases)} test case(s)",
            collection_id=collection_id,
            environment=environment.name if environment else None,
        )

        run_at = datetime.now(timezone.utc)
        start = time.perf_counter()
        record = ExecutionRecord()
        report = CollectionReport(
            collection_id=collection.id,
            collection_name=collection.name,
            run_at=run_at,
        )

        for test_case in test_cases:
            result = await self.case_runner.run(
                test_case, record, environment=environment, collection=collection
            )
            report.results.append(result)
            if result.status == TestStatus.PASSED:
                report.passed += 1
            elif result.status == TestStatus.FAILED:
                report.failed += 1
            else:
                report.errors += 1

        report.total = len(report.results)
        report.duration = round((time.perf_counter() - start) * 1000, 3)

        self.logger.info(
            f"Collection '{collection.name}' finished: {report.passed} passed, "
            f"{report.failed} failed, {report.errors} errors in {report.duration:.0f}ms",
            collection_id=collection_id,
        )
        return report
