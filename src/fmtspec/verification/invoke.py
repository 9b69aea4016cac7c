"""Format invocation with fully resolved options."""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..core.errors import ConfigError
from ..core.models import OptionSet
from ..formatters.abc import Formatter

# Built-in defaults, overridden by caller options
DEFAULT_OPTIONS: dict[str, Any] = {"plugins": ["."]}


def base_options(options: dict[str, Any] | None = None) -> OptionSet:
    """Merge caller overrides over the built-in defaults.

    Raises:
        ConfigError: If a known option has an unusable value
    """
    try:
        return OptionSet(**{**DEFAULT_OPTIONS, **(options or {})})
    except ValidationError as e:
        raise ConfigError(f"Invalid formatter options: {e}") from e


def merge_options(options: OptionSet, parser: str, python_bin: str) -> OptionSet:
    """Derive the option set of one run: one parser, one interpreter.

    The input is never modified.
    """
    return options.model_copy(update={"parser": parser, "python_bin": python_bin})


def format_source(
    formatter: Formatter, source: str, filepath: Path | str, options: OptionSet
) -> str:
    """Format a fixture.

    ``filepath`` provides file context to the formatter; an explicit
    ``filepath`` option takes precedence. Formatter errors propagate as-is.

    Raises:
        ConfigError: If the options do not select a parser and an interpreter
    """
    if not options.is_resolved:
        raise ConfigError(
            f"Options for {filepath} must select a parser and an interpreter "
            f"(parser={options.parser!r}, python_bin={options.python_bin!r})"
        )
    return formatter.format(source, {"filepath": str(filepath), **options.to_formatter()})
