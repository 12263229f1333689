"""Helper functions for CLI operations."""

import logging
import os
import sys
from typing import Dict, List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ...config_paths import ENV_OPTIONS_PATH


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    DUPLICATE_IDENTIFIER = 3
    DATA_SOURCE_ERROR = 4


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    # Auto-detect based on TTY
    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def resolve_log_level(verbose: int = 0, quiet: int = 0, debug: bool = False) -> str:
    """Map verbosity flags to a logging level name."""
    if debug:
        return "DEBUG"
    if verbose > quiet:
        return "DEBUG" if verbose >= 2 else "INFO"
    if quiet > verbose and quiet >= 2:
        return "ERROR"
    return "WARNING"


def configure_logging(level: str, no_color: bool = False) -> None:
    """Send package logs to stderr through Rich at ``level``."""
    logger = logging.getLogger("constant_cache")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True, no_color=no_color), show_path=False)
        logger.addHandler(handler)


def handle_error(error: Exception, exit_code: int = ExitCode.GENERIC_ERROR) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use
    """
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code)


def get_env_vars() -> Dict[str, Optional[str]]:
    """Get all CONSTANT_CACHE_* environment variables.

    Returns:
        Dictionary of environment variables and their values
    """
    env_vars: Dict[str, Optional[str]] = {}
    for key, value in os.environ.items():
        if key.startswith("CONSTANT_CACHE_"):
            env_vars[key] = value

    # Include known variables even if not set
    common_vars: List[str] = [ENV_OPTIONS_PATH]
    for var in common_vars:
        if var not in env_vars:
            env_vars[var] = None

    return env_vars
