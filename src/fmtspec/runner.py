"""Spec runner for fmtspec.

This module turns a fixture directory into test units: for every fixture and
every selected interpreter it registers a snapshot check of the primary
parser's output, one equivalence check per alternate parser and, when
enabled, a structural round-trip check.

Key features:
- Interpreters resolved once per process and passed in explicitly
- Units are independent: a failing format call fails only its own units
- One format call per fixture and interpreter, shared by its units
- Units run under pytest (see pytest_plugin) or in-process via run_units

Example:
    >>> units = run_spec(
    ...     Path("tests/python/comments"),
    ...     parsers=["python", "python_alt"],
    ...     version_range="3.*",
    ...     formatter=formatter,
    ... )
    >>> outcomes = run_units(units)
    >>> [o.name for o in outcomes if not o.passed]
    []
"""

from collections.abc import Iterable, Sequence
from functools import partial
from pathlib import Path
from typing import Any

from .core.errors import ConfigError
from .core.loaders import load_fixture, load_spec_definition
from .core.logging import get_logger
from .core.models import Fixture, InterpreterBinding, OptionSet, TestUnit, UnitOutcome
from .core.settings import Settings, load_settings
from .fixtures import enumerate_fixtures
from .formatters.abc import Formatter
from .interpreters.resolver import resolve_tracks
from .interpreters.selection import build_interpreter_set
from .suite import Suite
from .verification.cross_parser import verify_cross_parser
from .verification.invoke import base_options, format_source, merge_options
from .verification.roundtrip import check_round_trip, verify_round_trip
from .verification.snapshot import (
    FileSnapshotStore,
    SnapshotStore,
    default_snapshot_path,
    record_snapshot,
    snapshot_content,
    snapshot_key,
)

logger = get_logger(__name__)


class FixtureRun:
    """One fixture formatted with the primary parser on one interpreter.

    The formatted output is computed on first use and shared by every unit
    of the run. A failed format call is not cached, so each dependent unit
    reports the error itself.
    """

    def __init__(self, formatter: Formatter, fixture: Fixture, options: OptionSet):
        self.formatter = formatter
        self.fixture = fixture
        self.options = options
        self._output: str | None = None

    def reference_output(self) -> str:
        if self._output is None:
            self._output = format_source(
                self.formatter, self.fixture.source, self.fixture.path, self.options
            )
        return self._output


def _check_snapshot(run: FixtureRun, store: SnapshotStore) -> None:
    key = snapshot_key(run.fixture.name, run.options.parser)
    record_snapshot(store, key, snapshot_content(run.fixture.source, run.reference_output()))


def _check_parser(run: FixtureRun, parser: str) -> None:
    verify_cross_parser(
        run.formatter, run.fixture, run.reference_output(), run.options, parser
    )


def _check_round_trip(run: FixtureRun) -> None:
    round_trip = check_round_trip(
        run.formatter, run.fixture, run.options, render=run.reference_output
    )
    verify_round_trip(round_trip, name=run.fixture.name)


def run_spec(
    directory: Path | str,
    parsers: Sequence[str],
    version_range: str = "*",
    options: dict[str, Any] | None = None,
    *,
    formatter: Formatter,
    suite: Suite | None = None,
    settings: Settings | None = None,
    bindings: Sequence[InterpreterBinding | None] | None = None,
    store: SnapshotStore | None = None,
    require_all_tracks: bool | None = None,
) -> list[TestUnit]:
    """Register the conformance units of a fixture directory.

    Args:
        directory: Fixture directory
        parsers: Parser names; the first is the primary parser
        version_range: Interpreter versions the fixtures support
        options: Formatter option overrides
        formatter: Formatter under test
        suite: Suite to register into (a new one by default)
        settings: Harness settings (loaded from config/env by default)
        bindings: Resolved interpreters (resolved once per process by default)
        store: Snapshot store (the directory's snapshot file by default)
        require_all_tracks: Require every interpreter track; None requires it
            only for the "*" range

    Returns:
        The units registered by this call, in registration order

    Raises:
        ConfigError: If no parsers are given (nothing is registered)
    """
    if not parsers:
        raise ConfigError(f"No parsers were specified for {directory}")

    directory = Path(directory)
    if settings is None:
        settings = load_settings()
    if bindings is None:
        bindings = resolve_tracks(settings.interpreters or None)
    if suite is None:
        suite = Suite()
    if store is None:
        store = FileSnapshotStore(
            default_snapshot_path(directory), update=settings.update_snapshots
        )

    start = len(suite)
    base = base_options(options)
    primary, alternates = parsers[0], list(parsers[1:])

    interpreters = build_interpreter_set(
        version_range, bindings, suite, require_all_tracks=require_all_tracks
    )

    for path in enumerate_fixtures(directory):
        fixture = load_fixture(path)

        for python_bin in interpreters:
            run = FixtureRun(formatter, fixture, merge_options(base, primary, python_bin))
            suffix = f" [{python_bin}]"

            suite.add(
                f"{fixture.name} - {primary}-verify{suffix}",
                partial(_check_snapshot, run, store),
            )
            for parser in alternates:
                suite.add(
                    f"{fixture.name} - {parser}-verify{suffix}",
                    partial(_check_parser, run, parser),
                )
            if settings.ast_compare:
                suite.add(f"{fixture.name} parse{suffix}", partial(_check_round_trip, run))

    units = suite.units[start:]
    logger.info(
        f"Registered {len(units)} units for {directory} "
        f"(parsers={list(parsers)}, interpreters={interpreters})"
    )
    return units


def collect_directory(
    directory: Path | str,
    *,
    formatter: Formatter,
    settings: Settings | None = None,
    bindings: Sequence[InterpreterBinding | None] | None = None,
    store: SnapshotStore | None = None,
) -> list[TestUnit]:
    """Register the units of a directory described by its format_spec.yaml.

    Raises:
        ConfigError: If the spec definition is missing or invalid
    """
    spec = load_spec_definition(Path(directory))
    return run_spec(
        directory,
        spec.parsers,
        spec.versions,
        spec.options,
        formatter=formatter,
        settings=settings,
        bindings=bindings,
        store=store,
        require_all_tracks=spec.require_all_tracks,
    )


def run_units(units: Iterable[TestUnit]) -> list[UnitOutcome]:
    """Execute units in order, isolating failures per unit.

    Returns:
        One outcome per unit; errors are described, never raised
    """
    outcomes = []
    for unit in units:
        try:
            unit()
        except Exception as e:
            logger.debug(f"Unit '{unit.name}' failed: {e}")
            outcomes.append(
                UnitOutcome(name=unit.name, passed=False, error=f"{type(e).__name__}: {e}")
            )
        else:
            outcomes.append(UnitOutcome(name=unit.name, passed=True))
    return outcomes
