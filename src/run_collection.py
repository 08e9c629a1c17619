# src/run_collection.py

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import httpx

from adapters.repository.json_file_project_repository import JsonFileProjectRepository
from adapters.repository.json_file_test_collection_repository import (
    JsonFileTestCollectionRepository,
)
from adapters.repository.json_file_test_result_repository import (
    JsonFileTestResultRepository,
)
from application.services.test_execution_service import TestExecutionService
from common.logger import LoggerFactory, LogLevel
from core.exceptions import CollectionNotFoundError
from infra.configs.app_config import settings
from schemas.core.project import EnvironmentSelector

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run an API test collection")
    parser.add_argument(
        "--collection-id",
        type=str,
        required=True,
        help="ID of the test collection to run",
    )
    parser.add_argument(
        "--environment",
        type=str,
        default=None,
        help="Environment name (defaults to 'default', then the first environment)",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=settings.data_dir,
        help="Directory holding projects.json, collections.json and results.json",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the JSON report to this file instead of stdout",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    return parser


async def run(
    args: argparse.Namespace,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Run the collection described by ``args`` and return the process exit code."""
    log_level = LogLevel.DEBUG if args.verbose else LogLevel.from_name(settings.log_level)
    LoggerFactory.configure(level=log_level, log_file=settings.log_file)
    logger = LoggerFactory.get_logger(name="cli.run_collection", level=log_level)

    logger.add_context(collection_id=args.collection_id, data_dir=args.data_dir)
    logger.info("Starting collection run")

    service = TestExecutionService(
        project_repository=JsonFileProjectRepository(args.data_dir, verbose=args.verbose),
        collection_repository=JsonFileTestCollectionRepository(
            args.data_dir, verbose=args.verbose
        ),
        result_repository=JsonFileTestResultRepository(args.data_dir, verbose=args.verbose),
        request_timeout=settings.request_timeout,
        script_timeout=settings.script_timeout,
        script_max_memory=settings.script_max_memory,
        default_environment=settings.default_environment,
        strict_resolution=settings.strict_resolution,
        transport=transport,
        verbose=args.verbose,
    )

    environment = EnvironmentSelector(name=args.environment) if args.environment else None
    try:
        report = await service.run_collection(args.collection_id, environment)
    except CollectionNotFoundError as e:
        logger.error(str(e))
        return EXIT_NOT_FOUND
    finally:
        logger.clear_context()

    payload = json.dumps(report.to_wire(), indent=2, ensure_ascii=False)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload, encoding="utf-8")
        logger.info(f"Report saved to: {output_path}")
    else:
        print(payload)

    print(
        f"Summary: {report.passed}/{report.total} passed, "
        f"{report.failed} failed, {report.errors} errors",
        file=sys.stderr,
    )
    return EXIT_OK if report.passed == report.total else EXIT_FAILURES


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
