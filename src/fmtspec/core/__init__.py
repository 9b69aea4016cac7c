"""Core building blocks: errors, logging, models, loaders and settings."""

from .errors import ConfigError, FmtSpecError, FormatterError
from .loaders import SPEC_FILENAME, load_fixture, load_spec_definition, load_yaml
from .models import (
    Fixture,
    FormatterConfig,
    InterpreterBinding,
    InterpreterTrack,
    OptionSet,
    SpecDefinition,
    TestUnit,
    UnitOutcome,
)
from .settings import Settings, load_settings

__all__ = [
    "ConfigError",
    "FmtSpecError",
    "FormatterError",
    "SPEC_FILENAME",
    "load_fixture",
    "load_spec_definition",
    "load_yaml",
    "Fixture",
    "FormatterConfig",
    "InterpreterBinding",
    "InterpreterTrack",
    "OptionSet",
    "SpecDefinition",
    "TestUnit",
    "UnitOutcome",
    "Settings",
    "load_settings",
]
