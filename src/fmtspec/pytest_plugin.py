"""pytest integration.

Every ``format_spec.yaml`` under the test paths becomes a test module whose
items are the units registered by ``run_spec`` for that directory:

    tests/python/comments/format_spec.yaml
        parsers: [python, python_alt]
        versions: "3.*"
        options:
          tabWidth: 4

The formatter comes from the ``formatter`` block of the harness config
(``fmtspec.yaml``). Interpreters are resolved once per session and snapshot
files are written when the session finishes.
"""

from pathlib import Path

import pytest

from .core.errors import ConfigError
from .core.loaders import SPEC_FILENAME
from .core.logging import configure_logging, get_logger, parse_level
from .core.models import TestUnit
from .core.settings import Settings, load_settings
from .formatters import create_formatter
from .formatters.abc import Formatter
from .interpreters.resolver import resolve_tracks
from .runner import collect_directory
from .verification.snapshot import FileSnapshotStore, default_snapshot_path

logger = get_logger(__name__)


class HarnessState:
    """Session-wide settings, formatter, bindings and snapshot stores.

    Nothing is loaded until the first spec file is collected, so sessions
    without spec files never read the harness config or the .env file.

    Args:
        config_path: Harness config file given on the command line
        overrides: Settings fields forced by command-line flags
    """

    def __init__(self, config_path: Path | None = None, overrides: dict | None = None):
        self.config_path = config_path
        self.overrides = dict(overrides or {})
        self._settings: Settings | None = None
        self._formatter: Formatter | None = None
        self._bindings = None
        self.stores: dict[Path, FileSnapshotStore] = {}

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            settings = load_settings(self.config_path)
            if self.overrides:
                settings = settings.model_copy(update=self.overrides)
            configure_logging(level=parse_level(settings.log_level))
            self._settings = settings
        return self._settings

    @property
    def formatter(self) -> Formatter:
        if self._formatter is None:
            if self.settings.formatter is None:
                raise ConfigError(
                    "No formatter configured. Add a 'formatter' block to fmtspec.yaml"
                )
            self._formatter = create_formatter(self.settings.formatter)
        return self._formatter

    @property
    def bindings(self):
        if self._bindings is None:
            self._bindings = resolve_tracks(self.settings.interpreters or None)
        return self._bindings

    def store_for(self, directory: Path) -> FileSnapshotStore:
        if directory not in self.stores:
            self.stores[directory] = FileSnapshotStore(
                default_snapshot_path(directory), update=self.settings.update_snapshots
            )
        return self.stores[directory]

    def save(self) -> None:
        for store in self.stores.values():
            store.save()


state_key = pytest.StashKey[HarnessState]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("fmtspec", "formatter conformance specs")
    group.addoption(
        "--ast-compare",
        action="store_true",
        default=False,
        help="Also check that formatting preserves the syntax tree (AST_COMPARE).",
    )
    group.addoption(
        "--update-snapshots",
        action="store_true",
        default=False,
        help="Rewrite mismatching snapshots instead of failing (UPDATE_SNAPSHOTS).",
    )
    group.addoption(
        "--fmtspec-config",
        default=None,
        help="Harness config file (default: $FMTSPEC_CONFIG or ./fmtspec.yaml).",
    )


def pytest_configure(config: pytest.Config) -> None:
    config_path = config.getoption("fmtspec_config", None)

    overrides = {}
    if config.getoption("ast_compare", False):
        overrides["ast_compare"] = True
    if config.getoption("update_snapshots", False):
        overrides["update_snapshots"] = True

    config.stash[state_key] = HarnessState(
        Path(config_path) if config_path else None, overrides
    )


def pytest_collect_file(file_path: Path, parent: pytest.Collector):
    if file_path.name == SPEC_FILENAME:
        return SpecFile.from_parent(parent, path=file_path)
    return None


def pytest_sessionfinish(session: pytest.Session) -> None:
    state = session.config.stash.get(state_key, None)
    if state is not None:
        state.save()


class SpecFile(pytest.File):
    """A fixture directory's spec definition."""

    def collect(self):
        state = self.config.stash[state_key]
        units = collect_directory(
            self.path.parent,
            formatter=state.formatter,
            settings=state.settings,
            bindings=state.bindings,
            store=state.store_for(self.path.parent),
        )
        for unit in units:
            yield UnitItem.from_parent(self, name=unit.name, unit=unit)


class UnitItem(pytest.Item):
    """One registered unit."""

    def __init__(self, *, unit: TestUnit, **kwargs):
        super().__init__(**kwargs)
        self.unit = unit

    def runtest(self) -> None:
        self.unit()

    def repr_failure(self, excinfo, style=None):
        if isinstance(excinfo.value, AssertionError):
            return str(excinfo.value)
        return super().repr_failure(excinfo, style=style)

    def reportinfo(self):
        return self.path, None, self.name
