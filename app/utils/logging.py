"""
MyColor Structured Logging
Centralized logging configuration using loguru.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger


class StructuredLogger:
    """Structured logger for the MyColor color analysis service."""

    def __init__(self, level: str = "INFO"):
        """Initialize structured logger."""
        self.level = level
        self._configure_logger()

    def _configure_logger(self):
        """Configure loguru logger with structured format."""
        # Remove default handler
        logger.remove()

        logger.add(
            sys.stdout,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}",
            level=self.level,
            serialize=False  # Set to True for JSON output
        )

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with optional extra data."""
        if extra:
            logger.bind(**extra).info(message)
        else:
            logger.info(message)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with optional extra data."""
        if extra:
            logger.bind(**extra).warning(message)
        else:
            logger.warning(message)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log error message with optional extra data."""
        if extra:
            logger.bind(**extra).error(message)
        else:
            logger.error(message)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with optional extra data."""
        if extra:
            logger.bind(**extra).debug(message)
        else:
            logger.debug(message)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def configure_logging(level: str = "INFO") -> StructuredLogger:
    """(Re)build the global logger at the given level."""
    global _logger
    _logger = StructuredLogger(level=level)
    return _logger


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
