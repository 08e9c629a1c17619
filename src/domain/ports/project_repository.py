# domain/ports/project_repository.py

from abc import ABC, abstractmethod
from typing import Optional

from schemas.core.project import Interface, Project


class ProjectRepositoryInterface(ABC):
    """Read access to projects, their environments and interfaces."""

    @abstractmethod
    async def get_interface(self, interface_id: str) -> Optional[Interface]:
        """Get an interface definition by ID."""
        pass

    @abstractmethod
    async def get_project(self, project_id: str) -> Optional[Project]:
        """Get a project, including its environments, by ID."""
        pass
