"""Interpreter resolution and selection.

Public API:
    - resolve_interpreter: Bind the first satisfying candidate
    - resolve_tracks: Resolve all tracks once per process
    - build_interpreter_set: Select interpreters for a version range
"""

from .resolver import (
    DEFAULT_TRACKS,
    clear_cache,
    query_version,
    resolve_interpreter,
    resolve_tracks,
)
from .selection import build_interpreter_set

__all__ = [
    "DEFAULT_TRACKS",
    "clear_cache",
    "query_version",
    "resolve_interpreter",
    "resolve_tracks",
    "build_interpreter_set",
]
