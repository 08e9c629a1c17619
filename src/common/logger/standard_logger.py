# common/logger/standard_logger.py

import sys
from typing import Any, Dict, Optional
from pathlib import Path
from loguru import logger as loguru_logger

from common.logger.logger_interface import LoggerInterface, LogLevel


class StandardLogger(LoggerInterface):
    """Loguru-backed logger carrying structured context fields.

    Each named logger owns its own sinks, selected through the
    ``logger_name`` extra field, so levels can differ per component.
    Keyword arguments passed to the log methods are bound as extra
    fields for that single record.
    """

    # Class-level flag to track if default handler has been removed
    _default_handler_removed = False

    def __init__(
        self,
        name: str = "api-test-engine",
        level: LogLevel = LogLevel.INFO,
        use_colors: bool = True,
        log_file: Optional[str] = None,
    ):
        self.name = name
        self.context: Dict[str, Any] = {}
        self.level = level
        self.log_file = log_file

        if not StandardLogger._default_handler_removed:
            loguru_logger.remove()
            StandardLogger._default_handler_removed = True

        self._handler_ids = [
            loguru_logger.add(
                sys.stderr,
                format=self._console_format(use_colors),
                level=level.value,
                colorize=use_colors,
                backtrace=False,
                diagnose=False,
                filter=lambda record: record["extra"].get("logger_name") == name,
            )
        ]

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            self._handler_ids.append(
                loguru_logger.add(
                    log_file,
                    format=self._file_format(),
                    level=LogLevel.DEBUG.value,
                    rotation="10 MB",
                    retention="30 days",
                    compression="zip",
                    enqueue=True,
                    filter=lambda record: record["extra"].get("logger_name") == name,
                )
            )

        self.logger = loguru_logger.bind(logger_name=name)

    @staticmethod
    def _console_format(use_colors: bool) -> str:
        if use_colors:
            return (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[logger_name]}</cyan> | "
                "<level>{message}</level>"
            )
        return "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[logger_name]} | {message}"

    @staticmethod
    def _file_format() -> str:
        return (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{extra[logger_name]}:{function}:{line} | "
            "{message} | {extra}"
        )

    def _emit(self, level: str, message: str, *args, **fields) -> None:
        if args:
            message = message.format(*args)
        self.logger.bind(**{**self.context, **fields}).opt(depth=2).log(level, message)

    def debug(self, message: str, *args, **kwargs) -> None:
        self._emit("DEBUG", message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self._emit("INFO", message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self._emit("WARNING", message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self._emit("ERROR", message, *args, **kwargs)

    def log(self, level: LogLevel, message: str, *args, **kwargs) -> None:
        self._emit(level.value, message, *args, **kwargs)

    def add_context(self, **kwargs) -> None:
        self.context.update(kwargs)

    def remove_context(self, *keys) -> None:
        for key in keys:
            self.context.pop(key, None)

    def clear_context(self) -> None:
        self.context.clear()

    def get_context(self) -> Dict[str, Any]:
        return self.context.copy()

    def close(self) -> None:
        """Detach this logger's sinks"""
        for handler_id in self._handler_ids:
            try:
                loguru_logger.remove(handler_id)
            except ValueError:
                pass
        self._handler_ids = []
