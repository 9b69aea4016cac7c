"""Harness settings for fmtspec.

Settings come from two places, applied in order:

1. An optional harness config file (``fmtspec.yaml``) naming the formatter
   backend and, if needed, custom interpreter tracks
2. Environment variables (optionally loaded from a ``.env`` file):

   - ``AST_COMPARE``: enable the structural round-trip check
   - ``UPDATE_SNAPSHOTS``: rewrite mismatching snapshots instead of failing
   - ``FMTSPEC_LOG_LEVEL``: logging level name
   - ``FMTSPEC_CONFIG``: path to the harness config file
"""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .loaders import load_yaml
from .logging import get_logger
from .models import FormatterConfig, InterpreterTrack

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "fmtspec.yaml"

# Values that switch a flag off even though the variable is set
FALSE_VALUES = {"", "0", "false", "no", "off"}


def load_env_file(env_file: Path | None = None) -> None:
    """Load environment variables from a .env file.

    Args:
        env_file: Path to .env file. If None, looks for .env in current directory.

    Note:
        Variables already set in the environment take precedence.
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    if env_file.exists():
        logger.debug(f"Loading environment variables from {env_file}")
        load_dotenv(env_file, override=False)
    else:
        logger.debug(f"No .env file found at {env_file}")


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment.

    Any value other than an empty string, ``0``, ``false``, ``no`` or ``off``
    (case-insensitive) turns the flag on.

    Example:
        >>> os.environ["AST_COMPARE"] = "1"
        >>> env_flag("AST_COMPARE")
        True
    """
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in FALSE_VALUES


class Settings(BaseModel):
    """Resolved harness settings."""

    ast_compare: bool = False
    update_snapshots: bool = False
    log_level: str = "WARNING"
    formatter: FormatterConfig | None = None
    interpreters: list[InterpreterTrack] = Field(default_factory=list)


def load_settings(
    config_path: Path | None = None,
    env_file: Path | None = None,
) -> Settings:
    """Load settings from the harness config file and the environment.

    Args:
        config_path: Harness config file. Defaults to ``$FMTSPEC_CONFIG`` or
            ``./fmtspec.yaml`` when that file exists.
        env_file: Optional .env file to load first

    Returns:
        Validated Settings

    Raises:
        ConfigError: If an explicitly named config file is missing or invalid

    Example:
        >>> settings = load_settings()
        >>> settings.ast_compare
        False
    """
    load_env_file(env_file)

    raw: dict[str, Any] = {}
    explicit = config_path is not None or bool(os.getenv("FMTSPEC_CONFIG"))
    if config_path is None:
        config_path = Path(os.getenv("FMTSPEC_CONFIG") or DEFAULT_CONFIG_FILE)

    if config_path.exists():
        logger.debug(f"Loading harness config from {config_path}")
        raw = load_yaml(config_path)
    elif explicit:
        raise ConfigError(f"Harness config not found: {config_path}")

    raw["ast_compare"] = env_flag("AST_COMPARE", bool(raw.get("ast_compare", False)))
    raw["update_snapshots"] = env_flag(
        "UPDATE_SNAPSHOTS", bool(raw.get("update_snapshots", False))
    )
    raw["log_level"] = os.getenv("FMTSPEC_LOG_LEVEL") or raw.get("log_level", "WARNING")

    try:
        return Settings(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid harness config in {config_path}: {e}") from e
