"""YAML output formatter for CLI."""

import sys
from typing import Any, Optional, TextIO

import yaml


def format_yaml(data: Any, output: Optional[TextIO] = None) -> None:
    """Format data as YAML and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
    """
    if output is None:
        output = sys.stdout

    yaml.safe_dump(data, output, sort_keys=True, allow_unicode=True, default_flow_style=False)
