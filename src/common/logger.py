"""
Centralized logging configuration for the zips catalog.

Provides request-scoped logging with request_id tagging for easy debugging.
Supports a debug_mode flag for verbose logging (DEBUG_MODE=true).
"""

import logging
import sys
from typing import Optional

from src.common.config import Config


class RequestLogger:
    """
    Logger that tags every message with the current request id.

    Wraps a standard library logger so handlers and levels configured by
    setup_logging() still apply.
    """

    def __init__(
        self,
        name: str,
        request_id: Optional[str] = None,
        debug_mode: Optional[bool] = None
    ):
        """
        Initialize request logger.

        Args:
            name: Logger name (usually __name__)
            request_id: Optional request identifier for correlation
            debug_mode: If True, enables DEBUG level for this logger.
                       If None, follows Config.DEBUG_MODE.
        """
        self.logger = logging.getLogger(name)
        self.request_id = request_id

        self._debug_mode = debug_mode if debug_mode is not None else Config.DEBUG_MODE

        if self._debug_mode:
            self.logger.setLevel(logging.DEBUG)

    @property
    def level(self) -> int:
        """Get current logging level."""
        return self.logger.level

    def _format_message(self, message: str) -> str:
        """Add request prefix to message."""
        if self.request_id:
            return f"[req:{self.request_id[:8]}] {message}"
        return message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message(message), **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message(message), **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_message(message), **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_message(message), **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message), **kwargs)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format == "json":
        # JSON lines for log aggregators
        formatter = logging.Formatter(
            '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(
    name: str,
    request_id: Optional[str] = None,
    debug_mode: Optional[bool] = None
) -> RequestLogger:
    """
    Get a request logger instance.

    Args:
        name: Logger name (usually __name__)
        request_id: Optional request identifier
        debug_mode: If True, enables DEBUG level. If None, follows Config.DEBUG_MODE.

    Returns:
        RequestLogger instance
    """
    return RequestLogger(name, request_id, debug_mode)
