"""CLI unit tests for the constant-cache CLI."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from constant_cache.cli import app
from constant_cache.cli.utils.helpers import ExitCode, resolve_format, resolve_log_level
from constant_cache.config_paths import ENV_OPTIONS_PATH


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def records_file(tmp_path: Path) -> Path:
    """Write a records file with two types."""
    path = tmp_path / "records.yml"
    path.write_text(
        "Status:\n"
        "  - {id: 1, name: Pending}\n"
        "  - {id: 2, name: Active}\n"
        "  - {id: 3, name: 'Completed, Late'}\n"
        "  - {id: 4, name: ''}\n"
        "State:\n"
        "  - {name: California, abbreviation: CA}\n"
        "  - {name: Texas, abbreviation: TX}\n"
    )
    return path


@pytest.fixture
def duplicates_file(tmp_path: Path) -> Path:
    """Write a records file whose names collide."""
    path = tmp_path / "duplicates.yml"
    path.write_text("Status:\n  - {id: 1, name: Open}\n  - {id: 2, name: open}\n  - {id: 3, name: Closed}\n")
    return path


class TestShow:
    """Tests for the show command."""

    def test_show_json(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "show", str(records_file)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["count"] == 5
        status, state = data["types"]
        assert status["type"] == "Status"
        assert sorted(status["constants"]) == ["ACTIVE", "COMPLETED_LATE", "PENDING"]
        assert status["constants"]["PENDING"] == {"id": 1, "name": "Pending"}
        assert status["unbound"] == 1
        assert status["options"] == {"key": "name", "limit": 64, "allow_recaching": False, "strict": False}
        assert sorted(state["constants"]) == ["CALIFORNIA", "TEXAS"]

    def test_show_key_and_limit(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["--format", "json", "show", str(records_file), "--type", "State", "--key", "abbreviation", "--limit", "2"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [t["type"] for t in data["types"]] == ["State"]
        assert sorted(data["types"][0]["constants"]) == ["CA", "TX"]

    def test_show_yaml(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "yaml", "show", str(records_file), "--type", "State"])

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.output)
        assert data["types"][0]["constants"]["TEXAS"]["abbreviation"] == "TX"

    def test_show_table(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "--no-color", "show", str(records_file)])

        assert result.exit_code == 0, result.output
        assert "COMPLETED_LATE" in result.output
        assert "CALIFORNIA" in result.output
        assert "1 record(s) without a constant" in result.output

    def test_show_first_duplicate_wins(self, cli_runner: CliRunner, duplicates_file: Path) -> None:
        result = cli_runner.invoke(app, ["-qq", "--format", "json", "show", str(duplicates_file)])

        assert result.exit_code == 0, result.output
        constants = json.loads(result.output)["types"][0]["constants"]
        assert constants["OPEN"]["id"] == 1

    def test_show_recaching(self, cli_runner: CliRunner, duplicates_file: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "show", str(duplicates_file), "--allow-recaching"])

        assert result.exit_code == 0, result.output
        constants = json.loads(result.output)["types"][0]["constants"]
        assert constants["OPEN"]["id"] == 2

    def test_show_strict_duplicate(self, cli_runner: CliRunner, duplicates_file: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "show", str(duplicates_file), "--strict"])

        assert result.exit_code == ExitCode.DUPLICATE_IDENTIFIER
        assert "OPEN" in result.output

    def test_show_missing_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["show", str(tmp_path / "missing.yml")])

        assert result.exit_code == ExitCode.DATA_SOURCE_ERROR
        assert "Records file not found" in result.output

    def test_show_unknown_type(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(app, ["show", str(records_file), "--type", "Color"])

        assert result.exit_code == ExitCode.INVALID_USAGE
        assert "Color" in result.output

    def test_show_with_options_file(self, cli_runner: CliRunner, records_file: Path, tmp_path: Path) -> None:
        options = tmp_path / "options.yml"
        options.write_text("State:\n  key: abbreviation\nStatus:\n  limit: 3\n")

        result = cli_runner.invoke(
            app, ["--format", "json", "show", str(records_file), "--options-file", str(options)]
        )

        assert result.exit_code == 0, result.output
        status, state = json.loads(result.output)["types"]
        assert sorted(status["constants"]) == ["ACT", "COM", "PEN"]
        assert sorted(state["constants"]) == ["CA", "TX"]

    def test_command_line_beats_options_file(
        self, cli_runner: CliRunner, records_file: Path, tmp_path: Path
    ) -> None:
        options = tmp_path / "options.yml"
        options.write_text("Status:\n  limit: 3\n")

        with patch.dict(os.environ, {ENV_OPTIONS_PATH: str(options)}):
            result = cli_runner.invoke(
                app, ["--format", "json", "show", str(records_file), "--type", "Status", "--limit", "4"]
            )

        assert result.exit_code == 0, result.output
        assert sorted(json.loads(result.output)["types"][0]["constants"]) == ["ACTI", "COMP", "PEND"]

    def test_show_invalid_options_file(self, cli_runner: CliRunner, records_file: Path, tmp_path: Path) -> None:
        options = tmp_path / "options.yml"
        options.write_text("Status:\n  colour: red\n")

        result = cli_runner.invoke(app, ["show", str(records_file), "--options-file", str(options)])

        assert result.exit_code == ExitCode.DATA_SOURCE_ERROR
        assert "colour" in result.output


class TestName:
    """Tests for the name command."""

    def test_name_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "name", "Completed, Late", "!!!"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["names"] == [
            {"text": "Completed, Late", "identifier": "COMPLETED_LATE"},
            {"text": "!!!", "identifier": None},
        ]

    def test_name_limit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "name", "California", "--limit", "2"])

        assert json.loads(result.output)["names"][0]["identifier"] == "CA"

    def test_name_non_positive_limit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "name", "x" * 80, "--limit", "0"])

        assert json.loads(result.output)["names"][0]["identifier"] == "X" * 64

    def test_name_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "--no-color", "name", "Pending"])

        assert result.exit_code == 0
        assert "PENDING" in result.output


class TestConfig:
    """Tests for the config commands."""

    def test_paths_json(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "config", "paths"])

        assert result.exit_code == 0, result.output
        paths = json.loads(result.output)["options_paths"]
        assert paths["user"]["path"] == str(isolated_config / "cache_options.yml")
        assert paths["user"]["exists"] is False
        assert paths["active"] == {"path": None, "exists": False}

    def test_show_options(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        options = tmp_path / "options.yml"
        options.write_text("defaults:\n  strict: true\nState:\n  key: abbreviation\n  limit: 2\n")

        result = cli_runner.invoke(app, ["--format", "json", "config", "show", "--options-file", str(options)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["options_file"] == str(options)
        assert data["types"]["State"] == {"key": "abbreviation", "limit": 2, "allow_recaching": False, "strict": True}

    def test_show_options_without_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "--no-color", "config", "show"])

        assert result.exit_code == 0
        assert "built-in defaults" in result.output

    def test_show_missing_options_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["config", "show", "--options-file", str(tmp_path / "missing.yml")])

        assert result.exit_code == ExitCode.DATA_SOURCE_ERROR

    def test_env(self, cli_runner: CliRunner) -> None:
        with patch.dict(os.environ, {ENV_OPTIONS_PATH: "/somewhere.yml"}):
            result = cli_runner.invoke(app, ["--format", "json", "config", "env"])

        assert result.exit_code == 0
        assert json.loads(result.output)[ENV_OPTIONS_PATH] == {"value": "/somewhere.yml", "set": True}


def test_version(cli_runner: CliRunner) -> None:
    """Test --version prints the library version."""
    with patch("constant_cache.__version__", "9.9.9"):
        result = cli_runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "9.9.9" in result.output


@pytest.mark.parametrize(
    ("verbose", "quiet", "debug", "expected"),
    [
        (0, 0, False, "WARNING"),
        (1, 0, False, "INFO"),
        (2, 0, False, "DEBUG"),
        (0, 1, False, "WARNING"),
        (0, 2, False, "ERROR"),
        (0, 2, True, "DEBUG"),
    ],
)
def test_resolve_log_level(verbose: int, quiet: int, debug: bool, expected: str) -> None:
    """Test verbosity flags map to logging levels."""
    assert resolve_log_level(verbose, quiet, debug) == expected


def test_resolve_format() -> None:
    """Test explicit formats win and TTY detection picks the default."""
    assert resolve_format("JSON") == "json"
    with patch("constant_cache.cli.utils.helpers.sys") as mock_sys:
        mock_sys.stdout.isatty.return_value = True
        assert resolve_format(None) == "table"
        mock_sys.stdout.isatty.return_value = False
        assert resolve_format(None) == "json"
