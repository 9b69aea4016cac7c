"""Formatter abstract base class for fmtspec.

A Formatter is the system under test: it formats source text and exposes a
debug parser so formatted output can be compared structurally. fmtspec never
formats or parses anything itself.

Example:
    >>> formatter = create_formatter(FormatterConfig(tool="command", config={
    ...     "command": ["node", "bridge.js"],
    ... }))
    >>> formatter.format("x  =  1\\n", {"parser": "python", "pythonBin": "python3"})
    'x = 1\\n'
"""

from abc import ABC, abstractmethod
from typing import Any

# Fields that never carry structure: positions, raw slices, comments.
DEFAULT_COSMETIC_FIELDS = frozenset(
    {
        "loc",
        "range",
        "raw",
        "comments",
        "leadingComments",
        "trailingComments",
        "innerComments",
        "extra",
        "start",
        "end",
        "flags",
        "errors",
    }
)


class Formatter(ABC):
    """Abstract base class for formatters under test.

    Subclasses implement format() and parse(). The tree cleaning used for
    structural comparison has a generic default driven by configuration:

    - ``cosmetic_fields``: field names dropped from every node
    - ``kind_fields``: mapping of node kind -> extra field names to drop
    - ``kind_key``: field holding a node's kind (default ``"type"``)

    Attributes:
        config: Formatter-specific configuration dictionary
    """

    def __init__(self, config: dict | None = None):
        """Initialize the formatter with configuration.

        Args:
            config: Formatter-specific configuration dictionary

        Raises:
            ConfigError: If required configuration is missing or invalid
        """
        self.config = dict(config or {})
        self.kind_key: str = self.config.get("kind_key", "type")
        self.cosmetic_fields = frozenset(
            self.config.get("cosmetic_fields", DEFAULT_COSMETIC_FIELDS)
        )
        self.kind_fields: dict[str, frozenset[str]] = {
            kind: frozenset(fields)
            for kind, fields in self.config.get("kind_fields", {}).items()
        }

    @abstractmethod
    def format(self, source: str, options: dict[str, Any]) -> str:
        """Format source text.

        Args:
            source: Source text
            options: Formatter options (parser, pythonBin, filepath, ...)

        Returns:
            Formatted text

        Raises:
            Exception: Whatever the formatter raises (syntax errors,
                unsupported options, crashes); callers do not classify it
        """

    @abstractmethod
    def parse(self, source: str, options: dict[str, Any]) -> Any:
        """Parse source text into a tree of lists, mappings and scalars.

        A tolerated parse failure is reported as a non-empty ``errors`` list
        on the root mapping rather than raised.
        """

    def normalize_options(self, options: dict[str, Any]) -> dict[str, Any]:
        """Resolve options the way the formatter would before cleaning trees."""
        return dict(options)

    def massage_ast(self, ast: Any, options: dict[str, Any]) -> Any:
        """Remove cosmetic fields so trees compare structurally."""
        if isinstance(ast, list):
            return [self.massage_ast(item, options) for item in ast]
        if isinstance(ast, dict):
            kind = ast.get(self.kind_key)
            dropped = self.cosmetic_fields
            if isinstance(kind, str):
                dropped = dropped | self.kind_fields.get(kind, frozenset())
            return {
                key: self.massage_ast(value, options)
                for key, value in ast.items()
                if key not in dropped
            }
        return ast

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
