"""Tests for fmtspec data models."""

import pytest
from pydantic import ValidationError

from fmtspec.core.errors import ConfigError
from fmtspec.core.models import (
    FormatterConfig,
    InterpreterTrack,
    OptionSet,
    SpecDefinition,
    TestUnit,
)
from fmtspec.suite import Suite
from fmtspec.verification.invoke import base_options, merge_options


class TestOptionSet:
    """Tests for option merging and serialization."""

    def test_defaults_declare_plugin_root(self):
        assert OptionSet().plugins == ["."]
        assert base_options().plugins == ["."]

    def test_caller_overrides_defaults(self):
        options = base_options({"plugins": ["./plugin"], "tabWidth": 4})
        assert options.plugins == ["./plugin"]
        assert options.to_formatter()["tabWidth"] == 4

    def test_plugin_entries_are_not_validated(self):
        plugins = [{"name": "inline"}, "./plugin", 3]
        assert base_options({"plugins": plugins}).to_formatter()["plugins"] == plugins

    def test_unusable_known_option(self):
        """Validation failures surface as configuration errors."""
        with pytest.raises(ConfigError, match="Invalid formatter options"):
            base_options({"plugins": "."})

    def test_run_fields_override_caller(self):
        """Parser and interpreter of the run win over caller options."""
        options = base_options({"parser": "other", "pythonBin": "python9"})
        merged = merge_options(options, "fake", "python3")

        assert merged.parser == "fake"
        assert merged.python_bin == "python3"
        # The input is left untouched
        assert options.parser == "other"

    def test_to_formatter_uses_camel_case(self):
        options = merge_options(base_options({"printWidth": 100}), "fake", "python3")
        assert options.to_formatter() == {
            "plugins": ["."],
            "parser": "fake",
            "pythonBin": "python3",
            "printWidth": 100,
        }

    def test_is_resolved(self):
        assert not OptionSet().is_resolved
        assert not OptionSet(parser="fake").is_resolved
        assert OptionSet(parser="fake", python_bin="python3").is_resolved


class TestSpecDefinition:
    """Tests for SpecDefinition validation."""

    def test_defaults(self):
        spec = SpecDefinition(parsers=["fake"])
        assert spec.versions == "*"
        assert spec.options == {}
        assert spec.require_all_tracks is None

    def test_blank_parser_rejected(self):
        with pytest.raises(ValidationError, match="Parser names cannot be empty"):
            SpecDefinition(parsers=["fake", " "])


class TestOtherModels:
    def test_track_needs_executables(self):
        with pytest.raises(ValidationError):
            InterpreterTrack(name="python3", executables=[], constraint="3.*")

    def test_formatter_config_defaults(self):
        assert FormatterConfig(tool="command").config == {}

    def test_unit_is_callable(self):
        seen = []
        unit = TestUnit(name="unit", check=lambda: seen.append(True))
        unit()
        assert seen == [True]


class TestSuite:
    """Tests for unit registration."""

    def test_preserves_order(self):
        suite = Suite()
        suite.add("first", lambda: None)
        suite.add("second", lambda: None)
        assert [u.name for u in suite] == ["first", "second"]
        assert len(suite) == 2

    def test_duplicate_names_get_suffix(self):
        suite = Suite()
        suite.add("unit", lambda: None)
        suite.add("unit", lambda: None)
        suite.add("unit", lambda: None)
        assert [u.name for u in suite.units] == ["unit", "unit (2)", "unit (3)"]
