"""File loaders for fmtspec.

This module loads spec definitions and fixture files from the file system.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .logging import get_logger
from .models import Fixture, SpecDefinition

logger = get_logger(__name__)

# Name of the per-directory spec definition file
SPEC_FILENAME = "format_spec.yaml"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML as dictionary (an empty file yields an empty dict)

    Raises:
        ConfigError: If file cannot be read or YAML is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid YAML in {path}: expected dictionary, got {type(data).__name__}"
        )
    return data


def load_spec_definition(directory: Path) -> SpecDefinition:
    """Load the spec definition of a fixture directory.

    Args:
        directory: Fixture directory containing format_spec.yaml

    Returns:
        Validated SpecDefinition

    Raises:
        ConfigError: If the file is missing or invalid

    Example:
        >>> spec = load_spec_definition(Path("tests/python/comments"))
        >>> spec.parsers
        ['python']
    """
    spec_path = Path(directory) / SPEC_FILENAME

    if not spec_path.exists():
        raise ConfigError(f"Spec definition not found at {spec_path}")

    logger.debug(f"Loading spec definition from {spec_path}")

    raw_data = load_yaml(spec_path)
    try:
        return SpecDefinition(**raw_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid spec definition in {spec_path}: {e}") from e


def read_source(path: Path) -> str:
    """Read a fixture as UTF-8 with line endings normalized to ``\\n``.

    Undecodable bytes are replaced with U+FFFD.
    """
    return Path(path).read_text(encoding="utf-8", errors="replace").replace("\r\n", "\n")


def load_fixture(path: Path) -> Fixture:
    """Load a fixture file.

    Args:
        path: Path to the fixture

    Returns:
        Fixture with normalized source text
    """
    return Fixture(path=Path(path), source=read_source(path))
