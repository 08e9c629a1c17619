from .logger import (
    LoggerInterface,
    LogLevel,
    StandardLogger,
    LoggerFactory,
)

__all__ = [
    "LoggerInterface",
    "LogLevel",
    "StandardLogger",
    "LoggerFactory",
]
