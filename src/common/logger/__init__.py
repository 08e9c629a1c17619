from common.logger.logger_interface import LoggerInterface, LogLevel
from common.logger.standard_logger import StandardLogger
from common.logger.logger_factory import LoggerFactory

__all__ = [
    "LoggerInterface",
    "LogLevel",
    "StandardLogger",
    "LoggerFactory",
]
