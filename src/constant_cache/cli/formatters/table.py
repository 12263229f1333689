"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, List, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    # Let Rich use the actual terminal width to avoid truncating headers
    return Console(file=output, no_color=no_color)


def _format_record(record: Dict[str, Any]) -> str:
    return ", ".join(f"{key}={value!r}" for key, value in record.items())


def format_constants_table(types: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """Format cached constants as one Rich table per model type.

    Args:
        types: One entry per model type with ``type``, ``options``,
            ``constants`` and ``records`` keys
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    for entry in types:
        options = entry["options"]
        table = Table(
            title=f"{entry['type']} (key={options['key']}, limit={options['limit']})",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Constant", style="cyan", no_wrap=True)
        table.add_column(options["key"].replace("_", " ").title(), style="yellow")
        table.add_column("Record", style="dim")

        for identifier, record in entry["constants"].items():
            table.add_row(identifier, str(record.get(options["key"], "")), _format_record(record))

        console.print(table)
        unbound = entry["records"] - len(entry["constants"])
        if unbound:
            console.print(f"[dim]{unbound} record(s) without a constant[/dim]")


def format_names_table(names: Dict[str, Optional[str]], console: Optional[Console] = None) -> None:
    """Format text to identifier conversions as a Rich table."""
    if console is None:
        console = create_console()

    table = Table(title="Constant Names", show_header=True, header_style="bold magenta")
    table.add_column("Text", style="yellow")
    table.add_column("Constant", style="cyan")

    for text, identifier in names.items():
        table.add_row(text, identifier if identifier else Text("<none>", style="red"))

    console.print(table)


def format_options_table(
    options: Dict[str, Dict[str, Any]], path: Optional[str], console: Optional[Console] = None
) -> None:
    """Format effective cache options as a Rich table."""
    if console is None:
        console = create_console()

    console.print(f"[bold]Options File:[/bold] {path or 'none (built-in defaults)'}")

    table = Table(title="Cache Options", show_header=True, header_style="bold magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Key")
    table.add_column("Limit", justify="right")
    table.add_column("Recaching", justify="center")
    table.add_column("Strict", justify="center")

    for name, values in options.items():
        table.add_row(
            name,
            values["key"],
            str(values["limit"]),
            "✓" if values["allow_recaching"] else "✗",
            "✓" if values["strict"] else "✗",
        )

    console.print(table)


def format_config_paths_table(paths: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Format options file paths as a Rich table."""
    if console is None:
        console = create_console()

    table = Table(title="Options File Paths", show_header=True, header_style="bold magenta")
    table.add_column("Source", style="cyan")
    table.add_column("Path", style="dim")
    table.add_column("Exists", justify="center")

    for source, info in paths.items():
        exists = bool(info.get("exists"))
        table.add_row(
            source,
            info.get("path") or "N/A",
            Text("✓" if exists else "✗", style="green" if exists else "red"),
        )

    console.print(table)
