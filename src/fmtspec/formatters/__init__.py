"""Formatter backends.

Formatters are the system under test. All backends implement the Formatter
ABC with format() and parse(), plus the tree-cleaning contract used by the
structural round-trip check.

Public API:
    - Formatter: Abstract base class
    - CommandFormatter: JSON-over-stdio subprocess bridge
    - create_formatter: Factory function to create formatters from config
    - register_formatter: Register a backend in the registry
    - get_formatter: Get a backend class from the registry
    - list_formatters: List all registered backends
"""

# Import backends to trigger registration
from .abc import Formatter
from .command import CommandFormatter
from .factory import create_formatter
from .registry import get_formatter, list_formatters, register_formatter

__all__ = [
    "Formatter",
    "CommandFormatter",
    "create_formatter",
    "register_formatter",
    "get_formatter",
    "list_formatters",
]
