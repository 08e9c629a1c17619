# adapters/repository/json_file_test_result_repository.py

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Union

from domain.ports.test_result_repository import (
    DEFAULT_HISTORY_LIMIT,
    TestResultRepositoryInterface,
)
from schemas.core.test_result import TestResult
from common.logger import LoggerFactory, LogLevel

RESULTS_FILE = "results.json"


class JsonFileTestResultRepository(TestResultRepositoryInterface):
    """Create-only JSON file store of test results (``<data_dir>/results.json``)."""

    def __init__(self, data_dir: Union[str, Path] = "data", verbose: bool = False):
        self.logger = LoggerFactory.get_logger(
            name="repository.test_result",
            level=LogLevel.DEBUG if verbose else LogLevel.INFO,
        )
        self._file = Path(data_dir) / RESULTS_FILE
        self._file.parent.mkdir(parents=True, exist_ok=True)
        self._results: Dict[str, dict] = self._load_results()

    def _load_results(self) -> dict:
        """Load results from JSON file."""
        if not self._file.exists():
            return {}
        with open(self._file, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data.get("results", {})

    def _save_results(self) -> None:
        """Save results to JSON file."""
        data = {
            "results": self._results,
            "metadata": {
                "total_count": len(self._results),
                "last_updated": datetime.now(timezone.utc).isoformat(),
            },
        }
        tmp_file = self._file.with_name(f"{self._file.name}.{os.getpid()}.tmp")
        with open(tmp_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_file, self._file)
        self.logger.debug(f"Saved {len(self._results)} results to {self._file}")

    async def create(self, result: TestResult) -> TestResult:
        # Other processes may have appended since the last read
        self._results = self._load_results()
        if result.id in self._results:
            raise ValueError(f"Test result {result.id} already exists")

        self._results[result.id] = result.model_dump(mode="json")
        self._save_results()

        self.logger.info(
            f"Created test result: {result.id} for test case: {result.test_case_id}",
            status=result.status.value,
        )
        return result

    async def list_by_collection(
        self, collection_id: str, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> List[TestResult]:
        return self._select(lambda r: r.get("collection_id") == collection_id, limit)

    async def list_by_test_case(
        self, test_case_id: str, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> List[TestResult]:
        return self._select(lambda r: r.get("test_case_id") == test_case_id, limit)

    def _select(self, predicate: Callable[[dict], bool], limit: int) -> List[TestResult]:
        self._results = self._load_results()
        results = [
            TestResult(**result_dict)
            for result_dict in self._results.values()
            if predicate(result_dict)
        ]

        # Sort by run_at descending and limit
        results.sort(key=lambda x: x.run_at, reverse=True)
        return results[:limit]
