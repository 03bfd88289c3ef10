import logging
import os
import sys
from typing import Optional

from common.constants import LOG_PAYLOAD_PREVIEW_CHARS


class PayloadTruncationFilter(logging.Filter):
    """Filter to shorten surface payloads in log records."""

    def __init__(self, max_chars: int = LOG_PAYLOAD_PREVIEW_CHARS):
        super().__init__()
        self.max_chars = max_chars

    def filter(self, record: logging.LogRecord) -> bool:
        """Truncate long string arguments and flatten their newlines."""
        if hasattr(record, 'args') and record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._shorten(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._shorten(arg) for arg in record.args)

        return True

    def _shorten(self, value):
        """Shorten a single argument if it is a long string."""
        if not isinstance(value, str):
            return value
        flat = value.replace('\r', '\\r').replace('\n', '\\n')
        if len(flat) <= self.max_chars:
            return flat
        return f"{flat[:self.max_chars]}... ({len(value)} chars)"


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def resolve_log_level(log_level: Optional[str] = None, debug: bool = False) -> int:
    """
    Turn a level name into a logging level.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO
        debug: Force DEBUG regardless of the other inputs

    Returns:
        Numeric logging level
    """
    if debug:
        return logging.DEBUG
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')
    return getattr(logging, log_level.upper(), logging.INFO)


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    debug: bool = False
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Args:
        component_name: Name of the component (e.g., 'relay', 'cli')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO
        debug: Shortcut for DEBUG level

    Returns:
        Configured logger instance
    """
    level = resolve_log_level(log_level, debug)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_build_formatter())
    handler.addFilter(PayloadTruncationFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
