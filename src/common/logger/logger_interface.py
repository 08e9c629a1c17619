# common/logger/logger_interface.py

from abc import ABC, abstractmethod
from typing import Any, Dict
from enum import Enum


class LogLevel(Enum):
    """Log level enumeration"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Parse a level name such as ``"info"``; unknown names map to INFO."""
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError):
            return cls.INFO


class LoggerInterface(ABC):
    """Abstract interface every engine logger implements"""

    @abstractmethod
    def debug(self, message: str, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def info(self, message: str, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def error(self, message: str, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def log(self, level: LogLevel, message: str, *args, **kwargs) -> None:
        """Log message with specified level"""
        pass

    @abstractmethod
    def add_context(self, **context: Any) -> None:
        """Bind fields to every subsequent record"""
        pass

    @abstractmethod
    def remove_context(self, *keys: str) -> None:
        pass

    @abstractmethod
    def clear_context(self) -> None:
        pass

    @abstractmethod
    def get_context(self) -> Dict[str, Any]:
        pass
