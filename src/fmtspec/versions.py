"""Version range matching for interpreter selection.

Ranges use semantic-version range syntax, evaluated with PEP 440 specifiers:

- ``*`` or an empty string matches every version
- a bare version (or ``=V``) means "equal to"; partial versions and
  wildcards (``3.6``, ``2.*``, ``3.x``) match every release they prefix
- ``^V`` allows changes that keep the left-most non-zero part
  (``^3.6`` is ``>=3.6 <4``, ``^0.2`` is ``>=0.2 <0.3``)
- ``~V`` allows patch-level changes (``~3.6`` is ``>=3.6 <3.7``; ``~3`` is
  ``>=3 <4``)
- ``A - B`` is an inclusive range; a partial upper bound covers every
  release it prefixes (``3.6 - 3.12`` is ``>=3.6 <3.13``)
- whitespace-separated comparators are combined with AND (``>=3.6 <4``)
- ``||`` separates alternatives (``2.7.* || >=3.6``)

Pre-releases follow PEP 440 rather than node-semver: an interpreter
pre-release satisfies a range whenever its version falls inside it
(``3.13.0rc1`` satisfies ``3.*`` and ``>=3.6``), except that ``<V`` never
admits pre-releases of ``V`` itself (``4.0.0rc1`` does not satisfy ``^3.6``).
"""

import re
from functools import lru_cache

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from .core.errors import ConfigError

WILDCARD = "*"

_X_PART = re.compile(r"(?<=\.)[xX](?=$|\.)")
_HYPHEN_RANGE = re.compile(r"^(\S+)\s+-\s+(\S+)$")


def is_wildcard(version_range: str) -> bool:
    """True for the range that matches every version."""
    return version_range.strip() in ("", WILDCARD)


def _given_parts(version: str) -> list[str]:
    """Leading parts of a version up to the first wildcard ("3.x.1" -> ["3"])."""
    parts = []
    for part in version.split("."):
        if part in ("x", "X", WILDCARD):
            break
        parts.append(part)
    return parts


def _bump(release: tuple[int, ...], index: int) -> str:
    """Smallest release above every version sharing ``release[: index + 1]``."""
    bumped = list(release[:index]) + [release[index] + 1]
    return ".".join(str(n) for n in bumped)


def _caret(version: str) -> list[str]:
    parts = _given_parts(version)
    if not parts:
        return []
    release = Version(".".join(parts)).release
    index = next((i for i, n in enumerate(release) if n), len(release) - 1)
    return [f">={'.'.join(parts)}", f"<{_bump(release, index)}"]


def _tilde(version: str) -> list[str]:
    parts = _given_parts(version)
    if not parts:
        return []
    release = Version(".".join(parts)).release
    return [f">={'.'.join(parts)}", f"<{_bump(release, min(1, len(release) - 1))}"]


def _hyphen(lower: str, upper: str) -> list[str]:
    specifiers = []
    lower_parts = _given_parts(lower)
    if lower_parts:
        specifiers.append(f">={'.'.join(lower_parts)}")

    upper_parts = _given_parts(upper)
    if len(upper_parts) >= 3:
        specifiers.append(f"<={'.'.join(upper_parts)}")
    elif upper_parts:
        release = Version(".".join(upper_parts)).release
        specifiers.append(f"<{_bump(release, len(release) - 1)}")
    return specifiers


def _to_specifiers(comparator: str) -> list[str]:
    if comparator.startswith("^"):
        return _caret(comparator[1:])
    if comparator.startswith("~") and not comparator.startswith("~="):
        return _tilde(comparator[1:])
    if comparator.startswith("=") and not comparator.startswith("=="):
        comparator = comparator[1:]

    comparator = _X_PART.sub("*", comparator)
    if not comparator:
        raise InvalidSpecifier("'=' without a version")
    if not comparator[0].isdigit():
        return [comparator]
    # "3" and "3.6" are prefixes, like "3.*" and "3.6.*"
    if "*" not in comparator and comparator.count(".") < 2:
        comparator += ".*"
    return [f"=={comparator}"]


def _alternative(alternative: str) -> SpecifierSet | None:
    hyphen = _HYPHEN_RANGE.match(alternative)
    if hyphen:
        specifiers = _hyphen(*hyphen.groups())
    else:
        comparators = [c for c in re.split(r"[\s,]+", alternative) if c]
        if not comparators or comparators == [WILDCARD]:
            return None
        specifiers = [s for c in comparators for s in _to_specifiers(c)]

    if not specifiers:
        return None
    return SpecifierSet(",".join(specifiers))


@lru_cache(maxsize=None)
def parse_range(version_range: str) -> tuple[SpecifierSet | None, ...]:
    """Parse a range into alternatives; ``None`` stands for "any version".

    Raises:
        ConfigError: If a comparator is not a valid version or specifier
    """
    try:
        return tuple(
            _alternative(alternative.strip()) for alternative in version_range.split("||")
        )
    except (InvalidSpecifier, InvalidVersion) as e:
        raise ConfigError(f"Invalid version range '{version_range}': {e}") from e


def satisfies(version: str, version_range: str) -> bool:
    """Check whether a reported version falls inside a range.

    Unparseable versions never satisfy a range.

    Example:
        >>> satisfies("2.7.18", "2.*")
        True
        >>> satisfies("3.11.4", "^3.6")
        True
        >>> satisfies("3.11.4", ">=3.6 <3.10")
        False
    """
    try:
        parsed = Version(version.strip())
    except InvalidVersion:
        return False

    for specifiers in parse_range(version_range):
        if specifiers is None or specifiers.contains(parsed, prereleases=True):
            return True
    return False
