"""CLI formatters package."""

from .json import (
    format_config_paths_json,
    format_constants_json,
    format_json,
    format_names_json,
    format_options_json,
)
from .table import (
    create_console,
    format_config_paths_table,
    format_constants_table,
    format_names_table,
    format_options_table,
)
from .yaml import format_yaml

__all__ = [
    "format_json",
    "format_yaml",
    "format_constants_json",
    "format_names_json",
    "format_options_json",
    "format_config_paths_json",
    "create_console",
    "format_constants_table",
    "format_names_table",
    "format_options_table",
    "format_config_paths_table",
]
