"""Tests for options file path resolution."""

import os
from pathlib import Path
from unittest.mock import patch

from constant_cache.config_paths import (
    APP_NAME,
    ENV_OPTIONS_PATH,
    OPTIONS_FILENAME,
    get_options_path,
    get_user_config_dir,
    get_user_options_path,
)


def test_user_config_dir_uses_platformdirs(isolated_config: Path) -> None:
    """Test the user config directory comes from platformdirs."""
    assert get_user_config_dir() == isolated_config
    assert get_user_options_path() == isolated_config / OPTIONS_FILENAME


def test_platformdirs_receives_app_name() -> None:
    """Test the application name passed to platformdirs."""
    with patch("constant_cache.config_paths.platformdirs.user_config_dir", return_value="/cfg") as mock_dir:
        assert get_user_config_dir() == Path("/cfg")
    mock_dir.assert_called_once_with(APP_NAME)


def test_no_options_file() -> None:
    """Test no path is returned when nothing exists."""
    assert get_options_path() is None


def test_user_options_file(isolated_config: Path) -> None:
    """Test the user config directory is used when the file exists."""
    isolated_config.mkdir(parents=True)
    user_file = isolated_config / OPTIONS_FILENAME
    user_file.write_text("Status: {}\n")

    assert get_options_path() == str(user_file)


def test_env_var_takes_precedence(tmp_path: Path, isolated_config: Path) -> None:
    """Test the environment variable wins over the user config directory."""
    isolated_config.mkdir(parents=True)
    (isolated_config / OPTIONS_FILENAME).write_text("Status: {}\n")
    env_file = tmp_path / "env_options.yml"
    env_file.write_text("State: {}\n")

    with patch.dict(os.environ, {ENV_OPTIONS_PATH: str(env_file)}):
        assert get_options_path() == str(env_file)


def test_env_var_pointing_nowhere_is_ignored(tmp_path: Path) -> None:
    """Test a dangling environment variable falls through."""
    with patch.dict(os.environ, {ENV_OPTIONS_PATH: str(tmp_path / "missing.yml")}):
        assert get_options_path() is None
