"""Configuration path handling for the constant cache.

This module implements path resolution for the cache options file following
the XDG Base Directory Specification for user-specific configuration files.
"""

import os
from pathlib import Path
from typing import Optional

import platformdirs

# Application name used for directory paths
APP_NAME = "constant-cache"

# Environment variable names
ENV_OPTIONS_PATH = "CONSTANT_CACHE_OPTIONS_PATH"

# Default filenames
OPTIONS_FILENAME = "cache_options.yml"


def get_user_config_dir() -> Path:
    """Get the path to the user's config directory for this application."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_user_options_path() -> Path:
    """Get the path the user options file lives at, whether or not it exists."""
    return get_user_config_dir() / OPTIONS_FILENAME


def get_options_path() -> Optional[str]:
    """Get the path to the cache options file, respecting XDG specification.

    Returns:
        Path to the options file, or None when no options file is present
    """
    # 1. Check environment variable
    env_path = os.environ.get(ENV_OPTIONS_PATH)
    if env_path and Path(env_path).is_file():
        return env_path

    # 2. Check user config directory
    user_path = get_user_options_path()
    if user_path.is_file():
        return str(user_path)

    # 3. No options file; every type uses the defaults
    return None
