"""Structural round-trip verification.

Formatting must preserve structure: parsing the formatted output has to give
the same tree as parsing the source, once both trees are stripped of
positions, comments and other cosmetic fields. A fixture whose source parses
with errors is only held to "the output parses again", not to equality.
"""

import traceback
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..core.models import Fixture, OptionSet
from ..formatters.abc import Formatter
from .diff import tree_differences
from .invoke import format_source

# Raw source slices on tokens; positional, so they differ after reprinting
NON_COMPARABLE_KEYS = frozenset({"text"})


def strip_non_comparable_keys(ast: Any) -> Any:
    """Remove raw text slices from every node at every depth.

    Lists map element-wise, mappings recurse field-wise, scalars pass through.
    """
    if isinstance(ast, list):
        return [strip_non_comparable_keys(item) for item in ast]
    if isinstance(ast, dict):
        return {
            key: strip_non_comparable_keys(value)
            for key, value in ast.items()
            if key not in NON_COMPARABLE_KEYS
        }
    return ast


def parse_errors(ast: Any) -> list[Any]:
    """Errors a parser reported on the root node, if any."""
    if isinstance(ast, dict) and ast.get("errors"):
        return list(ast["errors"])
    return []


@dataclass
class Reparse:
    """Outcome of re-parsing formatted output: a tree or a diagnostic."""

    tree: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RoundTrip:
    """Normalized trees of a fixture before and after formatting."""

    original: Any
    reformatted: Reparse
    original_errors: list[Any] = field(default_factory=list)

    @property
    def comparable(self) -> bool:
        """Equality is only required when the source parsed cleanly."""
        return not self.original_errors


def check_round_trip(
    formatter: Formatter,
    fixture: Fixture,
    options: OptionSet,
    render: Callable[[], str] | None = None,
) -> RoundTrip:
    """Parse, format, re-parse and normalize a fixture.

    Args:
        formatter: Formatter under test
        fixture: Fixture to check
        options: Resolved option set of the run
        render: Returns the formatted output; defaults to formatting the
            fixture with ``options``

    Returns:
        RoundTrip. Failures while producing or re-parsing the formatted
        output are captured in ``reformatted.error``; a failure parsing the
        original source propagates.
    """
    formatter_options = options.to_formatter()
    normalized_options = formatter.normalize_options(formatter_options)

    ast = strip_non_comparable_keys(formatter.parse(fixture.source, formatter_options))
    original = formatter.massage_ast(ast, normalized_options)

    if render is None:
        def render() -> str:
            return format_source(formatter, fixture.source, fixture.path, options)

    try:
        reparsed = strip_non_comparable_keys(formatter.parse(render(), formatter_options))
        reformatted = Reparse(tree=formatter.massage_ast(reparsed, normalized_options))
    except Exception:
        reformatted = Reparse(error=traceback.format_exc())

    return RoundTrip(
        original=original,
        reformatted=reformatted,
        original_errors=parse_errors(ast),
    )


def verify_round_trip(round_trip: RoundTrip, name: str = "fixture") -> None:
    """Assert that a round trip preserved structure.

    Raises:
        AssertionError: If re-parsing failed, produced no tree, or (for
            cleanly parsed sources) produced a different tree
    """
    reformatted = round_trip.reformatted
    if not reformatted.ok:
        raise AssertionError(
            f"{name}: parsing the formatted output failed\n{reformatted.error}"
        )
    if reformatted.tree is None:
        raise AssertionError(f"{name}: parsing the formatted output produced no tree")

    if not round_trip.comparable:
        return
    differences = tree_differences(round_trip.original, reformatted.tree)
    if differences:
        raise AssertionError(
            f"{name}: formatting changed the syntax tree\n" + "\n".join(differences)
        )
