"""Fixture discovery."""

import os
import stat
from pathlib import Path

from .core.loaders import SPEC_FILENAME

SNAPSHOT_EXTENSION = ".snap"


def is_fixture(path: Path) -> bool:
    """Decide whether a directory entry is a fixture.

    Snapshot files, dotfiles, the spec definition and anything that is not a
    regular file (directories, symlinks) are skipped.
    """
    name = path.name
    if path.suffix == SNAPSHOT_EXTENSION:
        return False
    if name.startswith(".") or name == SPEC_FILENAME:
        return False
    try:
        return stat.S_ISREG(path.lstat().st_mode)
    except OSError:
        return False


def enumerate_fixtures(directory: Path) -> list[Path]:
    """List the fixtures of a directory, in directory iteration order.

    Subdirectories are not descended into.

    Example:
        >>> [p.name for p in enumerate_fixtures(Path("tests/python/comments"))]
        ['comments.py', 'inline.py']
    """
    directory = Path(directory)
    return [
        directory / name
        for name in os.listdir(directory)
        if is_fixture(directory / name)
    ]
