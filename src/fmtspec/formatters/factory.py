"""Formatter factory.

Creates Formatter instances from FormatterConfig objects by looking up the
tool in the registry.
"""

from ..core.errors import ConfigError
from ..core.logging import get_logger
from ..core.models import FormatterConfig
from .abc import Formatter
from .registry import get_formatter

logger = get_logger(__name__)


def create_formatter(config: FormatterConfig) -> Formatter:
    """Create a Formatter from its configuration.

    Args:
        config: FormatterConfig with tool name and tool-specific settings

    Returns:
        Initialized Formatter

    Raises:
        ConfigError: If the tool is unknown or rejects its configuration

    Example:
        >>> formatter = create_formatter(
        ...     FormatterConfig(tool="command", config={"command": ["fmt-bridge"]})
        ... )
    """
    try:
        formatter_class = get_formatter(config.tool)
    except ConfigError as e:
        raise ConfigError(f"Failed to create formatter: {e}") from e

    formatter = formatter_class(config=config.config)
    logger.debug(f"Created formatter {formatter!r} using tool '{config.tool}'")
    return formatter
