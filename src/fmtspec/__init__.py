"""fmtspec - conformance specs for multi-parser source formatters.

fmtspec drives a formatter over directories of fixture files and checks that
it behaves the same whichever parser or interpreter version analysed the
input.

Basic Usage:
    >>> from fmtspec import run_spec, run_units, create_formatter
    >>>
    >>> units = run_spec(
    ...     "tests/python/comments",
    ...     parsers=["python", "python_alt"],
    ...     version_range="*",
    ...     formatter=formatter,
    ... )
    >>> failures = [o for o in run_units(units) if not o.passed]

Public API:
    Running:
        - run_spec: Register the units of a fixture directory
        - collect_directory: Same, driven by the directory's format_spec.yaml
        - run_units: Execute units outside pytest

    Building blocks:
        - resolve_interpreter / resolve_tracks: Interpreter discovery
        - build_interpreter_set: Interpreters for a version range
        - enumerate_fixtures: Fixture discovery
        - format_source, verify_cross_parser, check_round_trip,
          verify_round_trip, record_snapshot: The individual checks

    Formatters:
        - Formatter: Base class
        - create_formatter / register_formatter

    Errors:
        - FmtSpecError, ConfigError, FormatterError
"""

from .core.errors import ConfigError, FmtSpecError, FormatterError
from .core.models import (
    Fixture,
    InterpreterBinding,
    InterpreterTrack,
    OptionSet,
    SpecDefinition,
    TestUnit,
    UnitOutcome,
)
from .core.settings import Settings, load_settings
from .fixtures import enumerate_fixtures
from .formatters import Formatter, create_formatter, register_formatter
from .interpreters import build_interpreter_set, resolve_interpreter, resolve_tracks
from .runner import collect_directory, run_spec, run_units
from .suite import Suite
from .verification import (
    check_round_trip,
    format_source,
    raw,
    record_snapshot,
    verify_cross_parser,
    verify_round_trip,
)
from .version import __version__

__all__ = [
    # Version
    "__version__",
    # Running
    "run_spec",
    "collect_directory",
    "run_units",
    "Suite",
    # Building blocks
    "resolve_interpreter",
    "resolve_tracks",
    "build_interpreter_set",
    "enumerate_fixtures",
    "format_source",
    "verify_cross_parser",
    "check_round_trip",
    "verify_round_trip",
    "record_snapshot",
    "raw",
    # Formatters
    "Formatter",
    "create_formatter",
    "register_formatter",
    # Models
    "Fixture",
    "InterpreterBinding",
    "InterpreterTrack",
    "OptionSet",
    "SpecDefinition",
    "TestUnit",
    "UnitOutcome",
    "Settings",
    "load_settings",
    # Errors
    "FmtSpecError",
    "ConfigError",
    "FormatterError",
]
