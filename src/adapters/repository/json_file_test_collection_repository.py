# adapters/repository/json_file_test_collection_repository.py

import json
from pathlib import Path
from typing import Dict, List, Optional, Union

from domain.ports.test_collection_repository import TestCollectionRepositoryInterface
from schemas.core.test_case import TestCase, TestCollection
from common.logger import LoggerFactory, LogLevel

COLLECTIONS_FILE = "collections.json"


class JsonFileTestCollectionRepository(TestCollectionRepositoryInterface):
    """
    Collections and test cases read from ``<data_dir>/collections.json``.

    Layout: ``{"collections": {id: {...}}, "test_cases": {id: {...}}}``.
    """

    def __init__(self, data_dir: Union[str, Path] = "data", verbose: bool = False):
        self.logger = LoggerFactory.get_logger(
            name="repository.test_collection",
            level=LogLevel.DEBUG if verbose else LogLevel.INFO,
        )
        self._file = Path(data_dir) / COLLECTIONS_FILE
        data = self._load()
        self._collections: Dict[str, dict] = data.get("collections", {})
        self._test_cases: Dict[str, dict] = data.get("test_cases", {})

    def _load(self) -> dict:
        if not self._file.exists():
            self.logger.warning(f"Collection store {self._file} does not exist")
            return {}
        with open(self._file, "r", encoding="utf-8") as f:
            data = json.load(f)
        self.logger.debug(f"Loaded collection store from {self._file}")
        return data

    async def get_collection(self, collection_id: str) -> Optional[TestCollection]:
        collection_dict = self._collections.get(collection_id)
        if collection_dict is None:
            return None
        return TestCollection(**{"id": collection_id, **collection_dict})

    async def list_test_cases(
        self, collection_id: str, enabled_only: bool = False
    ) -> List[TestCase]:
        test_cases = [
            TestCase(**{"id": case_id, **case_dict})
            for case_id, case_dict in self._test_cases.items()
            if case_dict.get("collection_id") == collection_id
        ]
        if enabled_only:
            test_cases = [case for case in test_cases if case.enabled]

        # Sort by order ascending
        test_cases.sort(key=lambda x: x.order)
        return test_cases

    async def get_test_case(self, test_case_id: str) -> Optional[TestCase]:
        case_dict = self._test_cases.get(test_case_id)
        if case_dict is None:
            return None
        return TestCase(**{"id": test_case_id, **case_dict})
