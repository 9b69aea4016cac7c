"""Readable failure messages for textual and structural mismatches."""

import difflib
from typing import Any


def text_diff(expected: str, actual: str, expected_label: str, actual_label: str) -> str:
    """Unified diff of two texts, line endings preserved."""
    return "".join(
        difflib.unified_diff(
            expected.splitlines(keepends=True),
            actual.splitlines(keepends=True),
            fromfile=expected_label,
            tofile=actual_label,
        )
    )


def _kind(value: Any) -> str:
    """Type name used for comparison; ints and floats are both numbers."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return "number"
    return type(value).__name__


def tree_differences(expected: Any, actual: Any, limit: int = 20) -> list[str]:
    """Compare two trees and describe where they differ.

    Args:
        expected: Tree from the original source
        actual: Tree from the formatted output
        limit: Stop after this many differences

    Returns:
        List of difference descriptions (empty if trees match)

    Example:
        >>> tree_differences({"type": "Name", "id": "x"}, {"type": "Name", "id": "y"})
        ["root.id: original='x', formatted='y'"]
    """
    differences: list[str] = []

    def compare_values(path: str, left: Any, right: Any) -> None:
        if len(differences) >= limit:
            return

        if _kind(left) != _kind(right):
            differences.append(
                f"{path}: Different types - original={_kind(left)}, "
                f"formatted={_kind(right)}"
            )
            return

        if isinstance(left, dict):
            for key in list(left) + [k for k in right if k not in left]:
                if len(differences) >= limit:
                    return
                if key not in right:
                    differences.append(f"{path}.{key}: missing after formatting")
                elif key not in left:
                    differences.append(f"{path}.{key}: added by formatting")
                else:
                    compare_values(f"{path}.{key}", left[key], right[key])
            return

        if isinstance(left, list):
            if len(left) != len(right):
                differences.append(
                    f"{path}: Different lengths - original={len(left)}, "
                    f"formatted={len(right)}"
                )
                return
            for i, (left_item, right_item) in enumerate(zip(left, right)):
                compare_values(f"{path}[{i}]", left_item, right_item)
            return

        if left != right:
            differences.append(f"{path}: original={left!r}, formatted={right!r}")

    compare_values("root", expected, actual)
    return differences
