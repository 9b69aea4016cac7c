"""Data models for fmtspec.

This module defines the Pydantic models shared by the resolver, the runner
and the verifiers. Configuration models are validated on load; run-time
models (bindings, option sets, fixtures) are built by the driver itself.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ============================================================================
# Interpreter Models
# ============================================================================


class InterpreterTrack(BaseModel):
    """One interpreter lineage: candidate executables in preference order."""

    name: str
    executables: list[str]
    constraint: str

    @field_validator("executables")
    @classmethod
    def validate_executables(cls, v: list[str]) -> list[str]:
        """Ensure at least one candidate executable is listed."""
        if not v:
            raise ValueError("Interpreter track needs at least one executable")
        return v


class InterpreterBinding(BaseModel):
    """A resolved interpreter: the first candidate satisfying its track."""

    model_config = ConfigDict(frozen=True)

    track: str
    executable: str
    version: str


# ============================================================================
# Formatter Models
# ============================================================================


class OptionSet(BaseModel):
    """Formatter options merged for a single format/parse call.

    Known fields are typed; anything else the caller supplies is passed
    through to the formatter untouched. Keys are emitted in camelCase
    (``python_bin`` -> ``pythonBin``) by :meth:`to_formatter`.
    """

    model_config = ConfigDict(
        extra="allow", alias_generator=to_camel, populate_by_name=True
    )

    plugins: list[Any] = Field(default_factory=lambda: ["."])
    parser: str | None = None
    python_bin: str | None = None
    filepath: str | None = None

    @property
    def is_resolved(self) -> bool:
        """True once exactly one parser and one interpreter are selected."""
        return bool(self.parser) and bool(self.python_bin)

    def to_formatter(self) -> dict[str, Any]:
        """Serialize for the formatter, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FormatterConfig(BaseModel):
    """Formatter backend configuration (the ``formatter`` block of fmtspec.yaml)."""

    tool: str
    config: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Fixture and Spec Models
# ============================================================================


class Fixture(BaseModel):
    """A fixture file and its line-ending normalized content."""

    model_config = ConfigDict(frozen=True)

    path: Path
    source: str

    @property
    def name(self) -> str:
        return self.path.name


class SpecDefinition(BaseModel):
    """Per-directory spec (loaded from <dir>/format_spec.yaml)."""

    parsers: list[str] = Field(default_factory=list)
    versions: str = "*"
    options: dict[str, Any] = Field(default_factory=dict)
    require_all_tracks: bool | None = None

    @field_validator("parsers")
    @classmethod
    def validate_parser_names(cls, v: list[str]) -> list[str]:
        """Reject blank parser names (an empty list is reported by run_spec)."""
        for name in v:
            if not name or not name.strip():
                raise ValueError("Parser names cannot be empty")
        return v


# ============================================================================
# Test Unit Models
# ============================================================================


@dataclass
class TestUnit:
    """A single independently reported check.

    Attributes:
        name: Unique, human-readable unit name
        check: Zero-argument callable; raises on failure
    """

    __test__ = False  # not a pytest test class

    name: str
    check: Callable[[], None]

    def __call__(self) -> None:
        self.check()


class UnitOutcome(BaseModel):
    """Result of executing one TestUnit outside pytest."""

    name: str
    passed: bool
    error: str | None = None
