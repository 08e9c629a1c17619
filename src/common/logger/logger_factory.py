# common/logger/logger_factory.py

from typing import Dict, Optional

from .logger_interface import LoggerInterface, LogLevel
from .standard_logger import StandardLogger


class LoggerFactory:
    """Factory handing out one cached logger per component name"""

    _instances: Dict[str, LoggerInterface] = {}
    _default_level: LogLevel = LogLevel.INFO
    _default_log_file: Optional[str] = None

    @classmethod
    def configure(
        cls, level: LogLevel = LogLevel.INFO, log_file: Optional[str] = None
    ) -> None:
        """Set defaults applied to loggers created after this call."""
        cls._default_level = level
        cls._default_log_file = log_file

    @classmethod
    def get_logger(
        cls,
        name: str = "api-test-engine",
        level: Optional[LogLevel] = None,
        use_colors: bool = True,
        log_file: Optional[str] = None,
    ) -> LoggerInterface:
        """
        Get or create a logger instance

        Args:
            name: Logger name, usually ``<layer>.<component>``
            level: Console level; falls back to the configured default
            use_colors: Whether to use colored console output
            log_file: Optional log file path; falls back to the configured default

        Returns:
            Logger instance
        """
        if name not in cls._instances:
            cls._instances[name] = StandardLogger(
                name=name,
                level=level or cls._default_level,
                use_colors=use_colors,
                log_file=log_file or cls._default_log_file,
            )
        return cls._instances[name]

    @classmethod
    def clear_cache(cls) -> None:
        """Drop cached loggers and detach their sinks"""
        for instance in cls._instances.values():
            if isinstance(instance, StandardLogger):
                instance.close()
        cls._instances.clear()
