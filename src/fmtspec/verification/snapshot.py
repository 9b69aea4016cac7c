"""Snapshot recording.

A snapshot holds a fixture's source and its formatted output in one string,
split by a line of tildes. Values are marked raw so the store writes them
verbatim (YAML literal blocks) instead of as escaped, quoted strings.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml

from ..core.loaders import SPEC_FILENAME, load_yaml
from ..core.logging import get_logger
from .diff import text_diff

logger = get_logger(__name__)

SEPARATOR = "~" * 80
SNAPSHOT_DIR = "__snapshots__"


class RawSnapshot(str):
    """Marker for strings stored without quote escaping."""


def raw(value: Any) -> RawSnapshot:
    """Mark a string as a raw snapshot value.

    Raises:
        TypeError: If ``value`` is not a string
    """
    if not isinstance(value, str):
        raise TypeError("Raw snapshots have to be strings.")
    return RawSnapshot(value)


def snapshot_content(source: str, output: str) -> RawSnapshot:
    """Join source and formatted output with the separator line."""
    return raw(source + SEPARATOR + "\n" + output)


def snapshot_key(fixture_name: str, parser: str) -> str:
    return f"{fixture_name} - {parser}"


def default_snapshot_path(directory: Path) -> Path:
    """``<dir>/__snapshots__/format_spec.yaml.snap``"""
    return Path(directory) / SNAPSHOT_DIR / f"{SPEC_FILENAME}.snap"


class SnapshotStore(ABC):
    """Matches values against stored baselines, recording new ones."""

    @abstractmethod
    def assert_match(self, name: str, content: str) -> None:
        """Compare ``content`` with the stored value of ``name``.

        Raises:
            AssertionError: If a stored value exists and differs
        """

    def save(self) -> None:
        """Persist recorded or updated values."""


def record_snapshot(store: SnapshotStore, name: str, content: str) -> None:
    store.assert_match(name, content)


class _SnapshotDumper(yaml.SafeDumper):
    pass


def _represent_raw(dumper: yaml.SafeDumper, data: RawSnapshot) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style="|")


_SnapshotDumper.add_representer(RawSnapshot, _represent_raw)


class FileSnapshotStore(SnapshotStore):
    """Snapshots kept as a YAML mapping in one file per spec directory.

    Args:
        path: Snapshot file
        update: Overwrite mismatching entries instead of failing
    """

    def __init__(self, path: Path, update: bool = False):
        self.path = Path(path)
        self.update = update
        self._entries: dict[str, str] | None = None
        self._dirty = False

    @property
    def entries(self) -> dict[str, str]:
        if self._entries is None:
            self._entries = (
                {str(k): str(v) for k, v in load_yaml(self.path).items()}
                if self.path.exists()
                else {}
            )
        return self._entries

    def assert_match(self, name: str, content: str) -> None:
        expected = self.entries.get(name)

        if expected is None:
            logger.info(f"Recording new snapshot '{name}'")
            self._write(name, content)
            return

        if expected == content:
            return

        if self.update:
            logger.info(f"Updating snapshot '{name}'")
            self._write(name, content)
            return

        raise AssertionError(
            f"Snapshot '{name}' does not match {self.path}\n"
            + text_diff(expected, content, "stored", "received")
        )

    def _write(self, name: str, content: str) -> None:
        self.entries[name] = str(content)
        self._dirty = True

    def save(self) -> None:
        if not self._dirty:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {name: raw(value) for name, value in self.entries.items()}
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(
                data,
                f,
                Dumper=_SnapshotDumper,
                sort_keys=True,
                allow_unicode=True,
                default_flow_style=False,
                width=float("inf"),
            )

        self._dirty = False
        logger.info(f"Saved {len(data)} snapshots to {self.path}")
