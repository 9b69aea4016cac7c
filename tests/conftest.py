"""Shared fixtures for fmtspec tests.

FakeFormatter stands in for a real formatter. Its "language" is lines of
whitespace-separated words:

- formatting collapses runs of whitespace inside each line
- parsing yields one Statement per non-blank line with its Word nodes
- a line containing ``!!`` is a tolerated parse error (root ``errors``)
- any ``@@`` makes both format() and parse() raise SyntaxError

Parser variants exercise the failure paths: ``fake_shouty`` upper-cases its
output, ``fake_lossy`` drops the last word of each line and
``fake_explosive`` emits output that cannot be parsed again.
"""

from typing import Any

import pytest

from fmtspec.core.models import InterpreterBinding
from fmtspec.core.settings import Settings
from fmtspec.formatters.abc import Formatter


class FakeFormatter(Formatter):
    """In-memory formatter for tests."""

    PARSERS = {"fake", "fake_alt", "fake_shouty", "fake_lossy", "fake_explosive"}

    def __init__(self, config: dict | None = None):
        super().__init__(config)
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def format(self, source: str, options: dict[str, Any]) -> str:
        self.calls.append(("format", dict(options)))
        parser = options.get("parser")
        if parser not in self.PARSERS:
            raise ValueError(f"Unknown parser: {parser}")
        if "@@" in source:
            raise SyntaxError("unexpected '@@'")

        lines = [" ".join(line.split()) for line in source.splitlines()]
        if parser == "fake_shouty":
            lines = [line.upper() for line in lines]
        elif parser == "fake_lossy":
            lines = [" ".join(line.split()[:-1]) for line in lines]
        elif parser == "fake_explosive":
            lines.append("@@")
        return "\n".join(lines) + "\n"

    def parse(self, source: str, options: dict[str, Any]) -> Any:
        self.calls.append(("parse", dict(options)))
        if "@@" in source:
            raise SyntaxError("unexpected '@@'")

        body = []
        errors = []
        offset = 0
        for lineno, line in enumerate(source.splitlines(), start=1):
            if "!!" in line:
                errors.append({"line": lineno, "message": "unexpected '!!'"})
            words = line.split()
            if words:
                body.append(
                    {
                        "type": "Statement",
                        "start": offset,
                        "text": line,
                        "words": [{"type": "Word", "value": w, "text": w} for w in words],
                    }
                )
            offset += len(line) + 1

        tree: dict[str, Any] = {
            "type": "Module",
            "body": body,
            "loc": {"start": 0, "end": len(source)},
        }
        if errors:
            tree["errors"] = errors
        return tree


@pytest.fixture
def formatter() -> FakeFormatter:
    return FakeFormatter()


@pytest.fixture
def bindings() -> tuple[InterpreterBinding, InterpreterBinding]:
    """Both tracks resolved."""
    return (
        InterpreterBinding(track="python2", executable="python2.7", version="2.7.18"),
        InterpreterBinding(track="python3", executable="python3", version="3.11.4"),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def fixture_dir(tmp_path):
    """A directory with a valid and an invalid fixture plus noise."""
    directory = tmp_path / "specs"
    directory.mkdir()
    (directory / "a.txt").write_text("hello   world\nfoo  bar\n", encoding="utf-8")
    (directory / "b.txt").write_text("broken !! line\n", encoding="utf-8")
    (directory / ".hidden").write_text("ignored\n", encoding="utf-8")
    (directory / "results.snap").write_text("ignored\n", encoding="utf-8")
    return directory


@pytest.fixture
def formatter_class() -> type[FakeFormatter]:
    return FakeFormatter
