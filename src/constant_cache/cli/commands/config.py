"""Options file commands for the constant-cache CLI."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import click

from ...config_paths import ENV_OPTIONS_PATH, get_options_path, get_user_options_path
from ...errors import ConfigurationError, InvalidOptionsError
from ...options import load_options_file
from ..formatters import (
    create_console,
    format_config_paths_json,
    format_config_paths_table,
    format_json,
    format_options_json,
    format_options_table,
    format_yaml,
)
from ..utils import ExitCode, get_env_vars, handle_error


def _path_info(path: Optional[str]) -> Dict[str, Any]:
    return {"path": path, "exists": bool(path and Path(path).is_file())}


@click.group()
def config() -> None:
    """Inspect cache options configuration."""
    pass


@config.command()
@click.pass_context
def paths(ctx: click.Context) -> None:
    """Show where cache options are looked up, in precedence order."""
    resolved = {
        "environment": _path_info(os.environ.get(ENV_OPTIONS_PATH)),
        "user": _path_info(str(get_user_options_path())),
        "active": _path_info(get_options_path()),
    }

    format_type = ctx.obj["format"]
    if format_type == "json":
        format_json(format_config_paths_json(resolved))
    elif format_type == "yaml":
        format_yaml(format_config_paths_json(resolved))
    else:
        format_config_paths_table(resolved, create_console(no_color=ctx.obj["no_color"]))


@config.command()
@click.option("--options-file", type=click.Path(dir_okay=False), help="Cache options YAML file.")
@click.pass_context
def show(ctx: click.Context, options_file: Optional[str]) -> None:
    """Show the effective cache options of every configured type."""
    path = options_file or get_options_path()
    try:
        options = load_options_file(path) if path else {}
    except (ConfigurationError, InvalidOptionsError) as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)

    values = {name: opts.to_dict() for name, opts in options.items()}
    format_type = ctx.obj["format"]
    if format_type == "json":
        format_json(format_options_json(values, path))
    elif format_type == "yaml":
        format_yaml(format_options_json(values, path))
    else:
        format_options_table(values, path, create_console(no_color=ctx.obj["no_color"]))


@config.command()
@click.pass_context
def env(ctx: click.Context) -> None:
    """Show the effective CONSTANT_CACHE_* environment variables."""
    env_vars = get_env_vars()
    data = {key: {"value": value, "set": value is not None} for key, value in env_vars.items()}
    if ctx.obj["format"] == "yaml":
        format_yaml(data)
    elif ctx.obj["format"] == "json":
        format_json(data)
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        for key, entry in sorted(data.items()):
            console.print(f"[cyan]{key}[/cyan] = {entry['value'] if entry['set'] else '[dim]<not set>[/dim]'}")
