"""Interpreter discovery.

Queries candidate executables in preference order and binds each version
track to the first installed interpreter that satisfies the track's
constraint. Probing spawns processes, so the per-track result is computed
once per process and cached; downstream code receives the bindings
explicitly.

Example:
    >>> bindings = resolve_tracks()
    >>> [b.executable for b in bindings if b is not None]
    ['python2.7', 'python3']
"""

import subprocess
from collections.abc import Sequence
from functools import lru_cache

from ..core.logging import get_logger
from ..core.models import InterpreterBinding, InterpreterTrack
from ..versions import satisfies

logger = get_logger(__name__)

# Prints the bare interpreter version, e.g. "3.11.4"
VERSION_QUERY = "import platform; print(platform.python_version())"

DEFAULT_TRACKS: tuple[InterpreterTrack, ...] = (
    InterpreterTrack(
        name="python2",
        executables=["python2.7", "python2", "python"],
        constraint="2.*",
    ),
    InterpreterTrack(
        name="python3",
        executables=["python3.6", "python3", "python"],
        constraint="3.*",
    ),
)


def query_version(executable: str) -> str | None:
    """Ask an interpreter for its version.

    Returns:
        The stripped version string, or None if the executable cannot be
        spawned or exits with a non-zero status
    """
    try:
        proc = subprocess.run(
            [executable, "-c", VERSION_QUERY],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.debug(f"Interpreter '{executable}' not available: {e}")
        return None

    if proc.returncode != 0:
        logger.debug(
            f"Interpreter '{executable}' exited with status {proc.returncode}"
        )
        return None

    return proc.stdout.strip() or None


def resolve_interpreter(
    candidates: Sequence[str], constraint: str, track: str = ""
) -> InterpreterBinding | None:
    """Bind the first candidate whose version satisfies ``constraint``.

    Each candidate is queried at most once, in order. Missing or failing
    interpreters are skipped, never retried.

    Args:
        candidates: Executable names or paths in preference order
        constraint: Version range the interpreter must satisfy
        track: Track name recorded on the binding

    Returns:
        InterpreterBinding, or None when no candidate qualifies
    """
    for executable in candidates:
        version = query_version(executable)
        if version is None:
            continue
        if satisfies(version, constraint):
            logger.debug(f"Track '{track}': using {executable} ({version})")
            return InterpreterBinding(track=track, executable=executable, version=version)
        logger.debug(
            f"Track '{track}': {executable} ({version}) does not satisfy {constraint}"
        )

    logger.info(f"Track '{track}': no interpreter satisfies {constraint}")
    return None


@lru_cache(maxsize=None)
def _resolve_cached(
    key: tuple[tuple[str, tuple[str, ...], str], ...],
) -> tuple[InterpreterBinding | None, ...]:
    return tuple(
        resolve_interpreter(executables, constraint, name)
        for name, executables, constraint in key
    )


def resolve_tracks(
    tracks: Sequence[InterpreterTrack] | None = None,
) -> tuple[InterpreterBinding | None, ...]:
    """Resolve every track once per process.

    Args:
        tracks: Tracks to resolve (default: DEFAULT_TRACKS)

    Returns:
        One entry per track, in track order; None where nothing was found
    """
    tracks = tuple(tracks) if tracks else DEFAULT_TRACKS
    key = tuple(
        (track.name, tuple(track.executables), track.constraint) for track in tracks
    )
    return _resolve_cached(key)


def clear_cache() -> None:
    """Forget resolved bindings (tests only)."""
    _resolve_cached.cache_clear()
