"""
Unit tests for the schemadiff CLI interface.
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from schemadiff.cli import main


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def initial_schema(write_schema):
    return write_schema(
        {
            "table": "places",
            "columns": [
                {"name": "cartodb_id", "type": "integer"},
                {"name": "the_geom", "type": "geometry"},
                {"name": "removed", "type": "text"},
                {"name": "value", "type": "integer"},
            ],
        },
        name="initial.yaml",
    )


@pytest.fixture
def final_schema(write_schema):
    return write_schema(
        {
            "table": "places",
            "columns": [
                {"name": "cartodb_id", "type": "integer"},
                {"name": "the_geom", "type": "geometry"},
                {"name": "value", "type": "bigint"},
                {"name": "added", "type": "text"},
            ],
        },
        name="final.yaml",
    )


class TestCLIMain:
    """Test main CLI functionality."""

    def test_cli_help(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "compare two versions of a table schema" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCompareCommand:
    """Test compare command functionality."""

    def test_compare_json(self, runner, initial_schema, final_schema):
        result = runner.invoke(main, ["compare", initial_schema, final_schema, "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [c["name"] for c in data["changes"]] == ["removed", "value", "added"]
        assert [c["kind"] for c in data["changes"]] == ["removed", "modified", "added"]
        assert data["changes"][1]["old"] == {"type": "integer"}
        assert data["changes"][1]["new"] == {"type": "bigint"}
        assert data["summary"]["total"] == 3

    def test_compare_table(self, runner, initial_schema, final_schema):
        result = runner.invoke(main, ["compare", initial_schema, final_schema])

        assert result.exit_code == 0
        assert "removed" in result.output
        assert "modified" in result.output
        assert "3 changes" in result.output

    def test_compare_identical(self, runner, initial_schema):
        result = runner.invoke(main, ["compare", initial_schema, initial_schema])

        assert result.exit_code == 0
        assert "No column changes" in result.output

    def test_fail_on_destructive(self, runner, initial_schema, final_schema):
        result = runner.invoke(
            main, ["compare", initial_schema, final_schema, "--fail-on", "destructive"]
        )

        assert result.exit_code == 2
        assert "Failing on: destructive" in result.output

    def test_fail_on_not_triggered(self, runner, initial_schema):
        result = runner.invoke(
            main, ["compare", initial_schema, initial_schema, "--fail-on", "removed"]
        )

        assert result.exit_code == 0

    def test_fail_on_from_config(self, runner, tmp_path, initial_schema, final_schema):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({
            "comparison": {"fail_on": ["added"], "output_format": "json"},
        }))

        result = runner.invoke(
            main, ["compare", initial_schema, final_schema, "--config", str(config_path)]
        )

        assert result.exit_code == 2
        assert json.loads(result.output)["summary"]["added"] == 1

    def test_invalid_schema_file(self, runner, tmp_path, initial_schema):
        broken = tmp_path / "broken.yaml"
        broken.write_text("columns: 42")

        result = runner.invoke(main, ["compare", initial_schema, str(broken)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_schema_file(self, runner, tmp_path, initial_schema):
        result = runner.invoke(main, ["compare", initial_schema, str(tmp_path / "nope.yaml")])

        assert result.exit_code != 0


class TestShowCommand:
    """Test show command functionality."""

    def test_show(self, runner, initial_schema):
        result = runner.invoke(main, ["show", initial_schema])

        assert result.exit_code == 0
        assert "places" in result.output
        assert "cartodb_id" in result.output
        assert "4 columns" in result.output


class TestConfigCommands:
    """Test init and validate-config commands."""

    def test_init_then_validate(self, runner, tmp_path):
        config_path = tmp_path / "schemadiff.yaml"

        result = runner.invoke(main, ["init", "--output", str(config_path)])
        assert result.exit_code == 0
        assert config_path.exists()

        result = runner.invoke(main, ["validate-config", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_init_does_not_overwrite_without_confirmation(self, runner, tmp_path):
        config_path = tmp_path / "schemadiff.yaml"
        config_path.write_text("debug: true\n")

        result = runner.invoke(main, ["init", "--output", str(config_path)], input="n\n")

        assert result.exit_code == 0
        assert config_path.read_text() == "debug: true\n"

    def test_validate_invalid_config(self, runner, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({"comparison": {"output_format": "xml"}}))

        result = runner.invoke(main, ["validate-config", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
