# infra/di/container.py

from dependency_injector import containers, providers
from fastapi import Depends

from domain.ports.project_repository import ProjectRepositoryInterface
from domain.ports.test_collection_repository import TestCollectionRepositoryInterface
from domain.ports.test_result_repository import TestResultRepositoryInterface

from adapters.repository.json_file_project_repository import (
    JsonFileProjectRepository,
)
from adapters.repository.json_file_test_collection_repository import (
    JsonFileTestCollectionRepository,
)
from adapters.repository.json_file_test_result_repository import (
    JsonFileTestResultRepository,
)

from application.services.test_execution_service import TestExecutionService

from core.hooks import TestHookRegistry


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the application."""

    # Configuration
    config = providers.Configuration()

    # HTTP transport handed to httpx; None means the real network
    http_transport = providers.Object(None)

    # Repositories
    project_repository: providers.Singleton[ProjectRepositoryInterface] = (
        providers.Singleton(JsonFileProjectRepository, data_dir=config.data_dir)
    )

    collection_repository: providers.Singleton[TestCollectionRepositoryInterface] = (
        providers.Singleton(JsonFileTestCollectionRepository, data_dir=config.data_dir)
    )

    result_repository: providers.Singleton[TestResultRepositoryInterface] = (
        providers.Singleton(JsonFileTestResultRepository, data_dir=config.data_dir)
    )

    # Lifecycle hooks shared by every run
    hooks: providers.Singleton[TestHookRegistry] = providers.Singleton(
        TestHookRegistry, verbose=config.debug
    )

    # Services
    test_execution_service: providers.Factory[TestExecutionService] = providers.Factory(
        TestExecutionService,
        project_repository=project_repository,
        collection_repository=collection_repository,
        result_repository=result_repository,
        hooks=hooks,
        request_timeout=config.execution.request_timeout,
        script_timeout=config.execution.script_timeout,
        script_max_memory=config.execution.script_max_memory,
        default_environment=config.execution.default_environment,
        strict_resolution=config.execution.strict_resolution,
        transport=http_transport,
        verbose=config.debug,
    )


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the configured container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def configure_container(container: Container, settings) -> Container:
    """Load application settings into the container configuration."""
    container.config.from_dict(
        {
            "data_dir": settings.data_dir,
            "debug": settings.debug,
            "execution": {
                "request_timeout": settings.request_timeout,
                "script_timeout": settings.script_timeout,
                "script_max_memory": settings.script_max_memory,
                "default_environment": settings.default_environment,
                "strict_resolution": settings.strict_resolution,
            },
        }
    )
    return container


# Dependency functions for FastAPI routers


def get_test_execution_service() -> TestExecutionService:
    """Get TestExecutionService instance from DI container."""
    return get_container().test_execution_service()


# FastAPI dependency providers
test_execution_service_dependency = Depends(get_test_execution_service)
