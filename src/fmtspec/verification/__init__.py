"""Format invocation and the checks run against its output.

Public API:
    - format_source: Format a fixture under a resolved option set
    - verify_cross_parser: Alternate parsers must match the primary output
    - check_round_trip / verify_round_trip: Structural idempotence
    - record_snapshot: Match output against a stored snapshot
"""

from .cross_parser import verify_cross_parser
from .invoke import DEFAULT_OPTIONS, base_options, format_source, merge_options
from .roundtrip import (
    Reparse,
    RoundTrip,
    check_round_trip,
    strip_non_comparable_keys,
    verify_round_trip,
)
from .snapshot import (
    SEPARATOR,
    FileSnapshotStore,
    RawSnapshot,
    SnapshotStore,
    default_snapshot_path,
    raw,
    record_snapshot,
    snapshot_content,
    snapshot_key,
)

__all__ = [
    "verify_cross_parser",
    "DEFAULT_OPTIONS",
    "base_options",
    "format_source",
    "merge_options",
    "Reparse",
    "RoundTrip",
    "check_round_trip",
    "strip_non_comparable_keys",
    "verify_round_trip",
    "SEPARATOR",
    "FileSnapshotStore",
    "RawSnapshot",
    "SnapshotStore",
    "default_snapshot_path",
    "raw",
    "record_snapshot",
    "snapshot_content",
    "snapshot_key",
]
