"""Formatter tools by name.

The harness config names its formatter with ``formatter.tool``; that name is
looked up here. ``command`` is built in. Projects register their own tools
from a conftest or plugin module. Registering a name again replaces the
earlier class.
"""

import re

from ..core.errors import ConfigError
from ..core.logging import get_logger
from .abc import Formatter

logger = get_logger(__name__)

TOOL_NAME = re.compile(r"[A-Za-z0-9_-]+")

# Tool name -> Formatter class
FORMATTER_REGISTRY: dict[str, type[Formatter]] = {}


def register_formatter(name: str, formatter_class: type[Formatter]) -> None:
    """Register a formatter tool.

    Raises:
        ConfigError: If the name is empty or contains characters other than
            letters, digits, hyphens and underscores, or if the class is not
            a Formatter
    """
    if not name:
        raise ConfigError("Formatter tool name cannot be empty")
    if not TOOL_NAME.fullmatch(name):
        raise ConfigError(
            f"Formatter tool name '{name}' must be alphanumeric with hyphens/underscores only"
        )
    if not isinstance(formatter_class, type) or not issubclass(formatter_class, Formatter):
        raise ConfigError(f"Formatter class {formatter_class!r} must inherit from Formatter")

    FORMATTER_REGISTRY[name] = formatter_class
    logger.debug(f"Formatter tool '{name}' -> {formatter_class.__name__}")


def get_formatter(name: str) -> type[Formatter]:
    """Look up a formatter tool.

    Raises:
        ConfigError: If the tool is not registered
    """
    try:
        return FORMATTER_REGISTRY[name]
    except KeyError:
        available = ", ".join(list_formatters()) or "(none)"
        raise ConfigError(
            f"Unknown formatter tool '{name}'. Available tools: {available}"
        ) from None


def list_formatters() -> list[str]:
    """Registered tool names, sorted."""
    return sorted(FORMATTER_REGISTRY)
