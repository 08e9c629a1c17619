# adapters/repository/json_file_project_repository.py

import json
from pathlib import Path
from typing import Dict, Optional, Union

from domain.ports.project_repository import ProjectRepositoryInterface
from schemas.core.project import Interface, Project
from common.logger import LoggerFactory, LogLevel

PROJECTS_FILE = "projects.json"


class JsonFileProjectRepository(ProjectRepositoryInterface):
    """
    Projects and interfaces read from ``<data_dir>/projects.json``.

    Layout: ``{"projects": {id: {...}}, "interfaces": {id: {...}}}``.
    """

    def __init__(self, data_dir: Union[str, Path] = "data", verbose: bool = False):
        self.logger = LoggerFactory.get_logger(
            name="repository.project",
            level=LogLevel.DEBUG if verbose else LogLevel.INFO,
        )
        self._file = Path(data_dir) / PROJECTS_FILE
        data = self._load()
        self._projects: Dict[str, dict] = data.get("projects", {})
        self._interfaces: Dict[str, dict] = data.get("interfaces", {})

    def _load(self) -> dict:
        if not self._file.exists():
            self.logger.warning(f"Project store {self._file} does not exist")
            return {}
        with open(self._file, "r", encoding="utf-8") as f:
            data = json.load(f)
        self.logger.debug(f"Loaded project store from {self._file}")
        return data

    async def get_interface(self, interface_id: str) -> Optional[Interface]:
        interface_dict = self._interfaces.get(interface_id)
        if interface_dict is None:
            return None
        return Interface(**{"id": interface_id, **interface_dict})

    async def get_project(self, project_id: str) -> Optional[Project]:
        project_dict = self._projects.get(project_id)
        if project_dict is None:
            return None
        return Project(**{"id": project_id, **project_dict})
