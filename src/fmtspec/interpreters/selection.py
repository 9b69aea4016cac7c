"""Working interpreter set for one spec directory.

Filters the process-wide bindings down to those a directory asks for and
registers the availability checks that guard the per-fixture units.
"""

from collections.abc import Sequence

from ..core.logging import get_logger
from ..core.models import InterpreterBinding
from ..suite import Suite
from ..versions import is_wildcard, satisfies

logger = get_logger(__name__)

AT_LEAST_ONE_UNIT = "At least one valid Python version"
ALL_TRACKS_UNIT = "Both Python versions available"


def build_interpreter_set(
    version_range: str,
    bindings: Sequence[InterpreterBinding | None],
    suite: Suite,
    require_all_tracks: bool | None = None,
) -> list[str]:
    """Select the interpreters a spec directory runs against.

    Args:
        version_range: Versions the directory supports ("*" for all)
        bindings: Resolved bindings in track order (None for missing tracks)
        suite: Suite receiving the availability units
        require_all_tracks: Also require one interpreter per track. None
            requires it only when ``version_range`` is the wildcard.

    Returns:
        Executables in track order, without duplicates. May be empty; the
        registered "at least one" unit reports that case.
    """
    executables: list[str] = []
    for binding in bindings:
        if binding is None or not satisfies(binding.version, version_range):
            continue
        if binding.executable not in executables:
            executables.append(binding.executable)

    def check_at_least_one() -> None:
        if not executables:
            raise AssertionError(f"No installed interpreter satisfies '{version_range}'")

    suite.add(AT_LEAST_ONE_UNIT, check_at_least_one)

    if require_all_tracks is None:
        require_all_tracks = is_wildcard(version_range)

    if require_all_tracks:
        expected = len(bindings)

        def check_all_tracks() -> None:
            if len(executables) != expected:
                raise AssertionError(
                    f"Expected {expected} interpreters, found {len(executables)}: "
                    f"{', '.join(executables) or '(none)'}"
                )

        suite.add(ALL_TRACKS_UNIT, check_all_tracks)

    logger.debug(f"Interpreters for '{version_range}': {executables}")
    return executables
