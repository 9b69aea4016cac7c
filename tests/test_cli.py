"""Tests for the fmtspec CLI."""

import sys
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from fmtspec.cli import app
from fmtspec.formatters.registry import FORMATTER_REGISTRY, register_formatter
from fmtspec.interpreters import clear_cache

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Empty working directory, no harness variables, fresh interpreter cache."""
    for name in ("AST_COMPARE", "UPDATE_SNAPSHOTS", "FMTSPEC_CONFIG", "FMTSPEC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    saved = dict(FORMATTER_REGISTRY)
    clear_cache()
    yield
    clear_cache()
    FORMATTER_REGISTRY.clear()
    FORMATTER_REGISTRY.update(saved)


@pytest.fixture
def harness_config(tmp_path, formatter_class):
    """fmtspec.yaml using the fake formatter and the running interpreter."""
    register_formatter("fake", formatter_class)
    path = tmp_path / "fmtspec.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "formatter": {"tool": "fake"},
                "interpreters": [
                    {"name": "current", "executables": [sys.executable], "constraint": "*"}
                ],
            }
        )
    )
    return path


class TestFixturesCommand:
    def test_lists_fixtures(self, fixture_dir):
        result = runner.invoke(app, ["fixtures", str(fixture_dir)])

        assert result.exit_code == 0
        listed = result.stdout.split()
        assert sorted(listed) == ["a.txt", "b.txt"]

    def test_not_a_directory(self, tmp_path):
        result = runner.invoke(app, ["fixtures", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Not a directory" in result.stdout


class TestInterpretersCommand:
    def test_shows_tracks(self, bindings):
        with patch("fmtspec.cli.resolve_tracks", return_value=[None, bindings[1]]):
            result = runner.invoke(app, ["interpreters"])

        assert result.exit_code == 0
        assert "python2" in result.stdout
        assert "not found" in result.stdout
        assert "3.11.4" in result.stdout

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["interpreters", "--config", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Harness config not found" in result.stdout


class TestRunCommand:
    """Tests for `fmtspec run`."""

    def test_passing_directory(self, fixture_dir, harness_config):
        (fixture_dir / "format_spec.yaml").write_text("parsers: [fake, fake_alt]\n")

        result = runner.invoke(app, ["run", str(fixture_dir), "--config", str(harness_config)])

        assert result.exit_code == 0, result.stdout
        # Availability units plus two units for each of a.txt and b.txt
        assert "6/6 units passed" in result.stdout
        assert (fixture_dir / "__snapshots__" / "format_spec.yaml.snap").exists()

    def test_ast_compare_flag(self, fixture_dir, harness_config):
        (fixture_dir / "format_spec.yaml").write_text("parsers: [fake]\n")

        result = runner.invoke(
            app, ["run", str(fixture_dir), "--config", str(harness_config), "--ast-compare"]
        )

        assert result.exit_code == 0, result.stdout
        assert "6/6 units passed" in result.stdout

    def test_failing_units_exit_nonzero(self, fixture_dir, harness_config):
        (fixture_dir / "format_spec.yaml").write_text("parsers: [fake, fake_shouty]\n")

        result = runner.invoke(app, ["run", str(fixture_dir), "--config", str(harness_config)])

        assert result.exit_code == 1
        assert "4/6 units passed" in result.stdout
        assert "output differs" in result.stdout

    def test_snapshot_update(self, fixture_dir, harness_config):
        (fixture_dir / "format_spec.yaml").write_text("parsers: [fake]\n")
        args = ["run", str(fixture_dir), "--config", str(harness_config)]
        assert runner.invoke(app, args).exit_code == 0

        (fixture_dir / "a.txt").write_text("changed   text\n")
        assert runner.invoke(app, args).exit_code == 1
        assert runner.invoke(app, args + ["--update-snapshots"]).exit_code == 0
        assert runner.invoke(app, args).exit_code == 0

    def test_missing_spec_definition(self, fixture_dir, harness_config):
        result = runner.invoke(app, ["run", str(fixture_dir), "--config", str(harness_config)])

        assert result.exit_code == 1
        assert "Spec definition not found" in result.stdout

    def test_no_formatter_configured(self, fixture_dir, tmp_path):
        config = tmp_path / "empty.yaml"
        config.write_text("ast_compare: false\n")

        result = runner.invoke(app, ["run", str(fixture_dir), "--config", str(config)])

        assert result.exit_code == 1
        assert "No formatter configured" in result.stdout
