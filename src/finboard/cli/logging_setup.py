"""Logging configuration for the finboard CLI."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING") -> None:
    """Send finboard log records to stderr at the given level."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger("finboard")
    root.handlers = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.propagate = False
    _logger.debug("Logging configured at %s", level.upper())
