"""Logging configuration for fmtspec.

All fmtspec modules log under the ``fmtspec`` logger tree. Records go to
stderr so formatter output and CLI tables on stdout stay clean. The level
comes from ``FMTSPEC_LOG_LEVEL`` (or the harness config's ``log_level``).
"""

import logging
import os
import sys

ROOT_LOGGER = "fmtspec"

# Default log level (override with FMTSPEC_LOG_LEVEL)
DEFAULT_LEVEL = logging.WARNING

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_level(value: str | int | None, default: int = DEFAULT_LEVEL) -> int:
    """Translate a level name ("debug", "INFO") or number into a logging level."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def configure_logging(level: int = DEFAULT_LEVEL) -> None:
    """Send ``fmtspec`` records at ``level`` and above to stderr.

    Calling it again replaces the previous handler.

    Example:
        # Trace interpreter lookups and unit registration
        configure_logging(level=logging.DEBUG)
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    # Records stay out of the root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a module logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)


configure_logging(level=parse_level(os.getenv("FMTSPEC_LOG_LEVEL")))
