"""Tests for formatter backends: registry, factory, tree cleaning and the
subprocess bridge."""

import sys
import textwrap

import pytest

from fmtspec.core.errors import ConfigError, FormatterError
from fmtspec.core.models import FormatterConfig
from fmtspec.formatters import (
    CommandFormatter,
    Formatter,
    create_formatter,
    get_formatter,
    list_formatters,
    register_formatter,
)
from fmtspec.formatters.registry import FORMATTER_REGISTRY


@pytest.fixture
def registry():
    """Restore the global registry after a test registers tools."""
    saved = dict(FORMATTER_REGISTRY)
    yield FORMATTER_REGISTRY
    FORMATTER_REGISTRY.clear()
    FORMATTER_REGISTRY.update(saved)


# ============================================================================
# Registry and Factory
# ============================================================================


class TestRegistry:
    """Tests for the formatter registry."""

    def test_command_is_registered(self):
        assert "command" in list_formatters()
        assert get_formatter("command") is CommandFormatter

    def test_register_and_get(self, registry, formatter_class):
        register_formatter("fake-tool", formatter_class)
        assert get_formatter("fake-tool") is formatter_class

    def test_invalid_name(self, registry, formatter_class):
        with pytest.raises(ConfigError, match="alphanumeric"):
            register_formatter("bad name!", formatter_class)
        with pytest.raises(ConfigError, match="cannot be empty"):
            register_formatter("", formatter_class)

    def test_reregistering_replaces(self, registry, formatter_class):
        class Replacement(formatter_class):
            pass

        register_formatter("fake-tool", formatter_class)
        register_formatter("fake-tool", Replacement)
        assert get_formatter("fake-tool") is Replacement

    def test_not_a_formatter(self, registry):
        with pytest.raises(ConfigError, match="must inherit from Formatter"):
            register_formatter("plain", dict)

    def test_unknown_tool(self):
        with pytest.raises(ConfigError, match="Unknown formatter tool 'nope'"):
            get_formatter("nope")


class TestFactory:
    """Tests for create_formatter()."""

    def test_creates_configured_instance(self, registry, formatter_class):
        register_formatter("fake", formatter_class)
        formatter = create_formatter(FormatterConfig(tool="fake", config={"kind_key": "kind"}))

        assert isinstance(formatter, formatter_class)
        assert formatter.kind_key == "kind"

    def test_unknown_tool(self):
        with pytest.raises(ConfigError, match="Failed to create formatter"):
            create_formatter(FormatterConfig(tool="missing"))

    def test_rejected_config(self):
        with pytest.raises(ConfigError, match="requires a 'command'"):
            create_formatter(FormatterConfig(tool="command"))


# ============================================================================
# Tree Cleaning
# ============================================================================


class TestMassageAst:
    """Tests for Formatter.massage_ast()."""

    def test_drops_cosmetic_fields_at_every_depth(self, formatter_class):
        formatter = formatter_class()
        tree = {
            "type": "Module",
            "loc": {"start": 0},
            "body": [
                {"type": "Name", "id": "x", "start": 0, "end": 1, "comments": ["# c"]},
            ],
            "errors": [],
        }

        assert formatter.massage_ast(tree, {}) == {
            "type": "Module",
            "body": [{"type": "Name", "id": "x"}],
        }

    def test_scalars_pass_through(self, formatter_class):
        formatter = formatter_class()
        assert formatter.massage_ast(3, {}) == 3
        assert formatter.massage_ast(["a", None], {}) == ["a", None]

    def test_kind_fields(self, formatter_class):
        formatter = formatter_class({"kind_fields": {"Str": ["quote"]}})
        tree = [
            {"type": "Str", "value": "a", "quote": "'"},
            {"type": "Other", "quote": "'"},
        ]

        assert formatter.massage_ast(tree, {}) == [
            {"type": "Str", "value": "a"},
            {"type": "Other", "quote": "'"},
        ]

    def test_custom_cosmetic_fields_and_kind_key(self, formatter_class):
        formatter = formatter_class(
            {"cosmetic_fields": ["lineno"], "kind_key": "node", "kind_fields": {"If": ["elif"]}}
        )
        tree = {"node": "If", "lineno": 3, "loc": 1, "elif": True}

        assert formatter.massage_ast(tree, {}) == {"node": "If", "loc": 1}

    def test_unhashable_kind(self, formatter_class):
        """A kind field that is not a string does not select kind fields."""
        formatter = formatter_class({"kind_fields": {"Str": ["quote"]}})
        tree = {"type": ["Str"], "quote": "'"}

        assert formatter.massage_ast(tree, {}) == tree

    def test_abstract(self):
        with pytest.raises(TypeError):
            Formatter()


# ============================================================================
# Subprocess Bridge
# ============================================================================


def bridge(tmp_path, body: str) -> list[str]:
    """Write a bridge script and return the command running it."""
    script = tmp_path / "bridge.py"
    script.write_text(
        "import json, sys\n"
        "request = json.load(sys.stdin)\n" + textwrap.dedent(body),
        encoding="utf-8",
    )
    return [sys.executable, str(script)]


class TestCommandFormatter:
    """Tests for CommandFormatter."""

    def test_format(self, tmp_path):
        command = bridge(
            tmp_path,
            """
            out = " ".join(request["source"].split()) + "\\n"
            if request["action"] == "format":
                print(json.dumps({"result": out + request["options"]["parser"]}))
            """,
        )
        formatter = CommandFormatter({"command": command})

        assert formatter.format("a   b", {"parser": "python"}) == "a b\npython"

    def test_parse(self, tmp_path):
        command = bridge(
            tmp_path,
            """
            print(json.dumps({"result": {"type": "Module", "action": request["action"]}}))
            """,
        )
        formatter = CommandFormatter({"command": command})

        assert formatter.parse("x", {}) == {"type": "Module", "action": "parse"}

    def test_string_command(self, tmp_path):
        script = tmp_path / "echo.py"
        script.write_text("print('{\"result\": \"ok\"}')\n")

        formatter = CommandFormatter({"command": f"{sys.executable} {script}"})
        assert formatter.command == [sys.executable, str(script)]
        assert formatter.format("", {}) == "ok"

    def test_environment(self, tmp_path):
        command = bridge(
            tmp_path,
            """
            import os
            print(json.dumps({"result": os.environ["FMT_FLAVOR"]}))
            """,
        )
        formatter = CommandFormatter({"command": command, "env": {"FMT_FLAVOR": "tabs"}})

        assert formatter.format("", {}) == "tabs"

    def test_error_reply(self, tmp_path):
        command = bridge(tmp_path, 'print(json.dumps({"error": "Unexpected token (1:3)"}))\n')
        formatter = CommandFormatter({"command": command})

        with pytest.raises(FormatterError, match=r"Unexpected token \(1:3\)"):
            formatter.format("x = ", {})

    def test_non_zero_exit(self, tmp_path):
        command = bridge(tmp_path, 'sys.stderr.write("crashed\\n")\nsys.exit(3)\n')
        formatter = CommandFormatter({"command": command})

        with pytest.raises(FormatterError, match="crashed"):
            formatter.parse("x", {})

    def test_invalid_json(self, tmp_path):
        command = bridge(tmp_path, 'print("not json")\n')
        with pytest.raises(FormatterError, match="invalid JSON"):
            CommandFormatter({"command": command}).format("x", {})

    def test_non_text_result(self, tmp_path):
        command = bridge(tmp_path, 'print(json.dumps({"result": [1, 2]}))\n')
        with pytest.raises(FormatterError, match="instead of text"):
            CommandFormatter({"command": command}).format("x", {})

    def test_missing_executable(self, tmp_path):
        formatter = CommandFormatter({"command": [str(tmp_path / "no-such-formatter")]})
        with pytest.raises(FormatterError, match="Cannot run formatter"):
            formatter.format("x", {})

    def test_missing_command(self):
        with pytest.raises(ConfigError):
            CommandFormatter({})
