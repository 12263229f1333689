"""Main CLI application for constant-cache."""

from typing import Optional

import click
import rich_click as rich_click

from .utils import configure_logging, resolve_format, resolve_log_level

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


def _show_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    try:
        from .. import __version__

        library_version = __version__
    except ImportError:
        library_version = "unknown"
    click.echo(f"constant-cache version: {library_version}")
    ctx.exit()


@click.group()
@click.option(
    "--format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option(
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_show_version,
    help="Print the library version.",
)
@click.pass_context
def app(
    ctx: click.Context,
    format: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
) -> None:
    """constant-cache - turn records into named constants.

    Examples:
      # Show the constants a records file produces
      constant-cache show statuses.yml

      # Use another attribute and a shorter limit
      constant-cache show states.yml --key abbreviation --limit 2

      # Preview a single name
      constant-cache name "Completed, Late"
    """
    ctx.ensure_object(dict)

    log_level = resolve_log_level(verbose, quiet, debug)
    configure_logging(log_level, no_color=no_color)

    ctx.obj.update(
        {
            "format": resolve_format(format),
            "format_explicit": format is not None,
            "verbose": verbose,
            "quiet": quiet,
            "debug": debug,
            "no_color": no_color,
            "log_level": log_level,
        }
    )


# Import and register subcommands after the group is built
from .commands import config, constants  # noqa: E402

app.add_command(constants.show)
app.add_command(constants.name)
app.add_command(config.config)


if __name__ == "__main__":
    app()
