"""Constant caching commands for the constant-cache CLI."""

from typing import Any, Dict, List, Optional, Tuple

import click

from ...config_paths import get_options_path
from ...errors import ConfigurationError, DuplicateIdentifierError, InvalidOptionsError
from ...naming import constant_name
from ...options import CHARACTER_LIMIT, DEFAULTS_SECTION, CacheOptions, load_options_file
from ...registry import ConstantRegistry, RegistryConfig
from ...sources import YamlRecordSource
from ..formatters import (
    create_console,
    format_constants_json,
    format_constants_table,
    format_json,
    format_names_json,
    format_names_table,
    format_yaml,
)
from ..utils import ExitCode, handle_error


def _emit(ctx: click.Context, data: Dict[str, Any], table_formatter: Any, *table_args: Any) -> None:
    format_type = ctx.obj["format"]
    if format_type == "json":
        format_json(data)
    elif format_type == "yaml":
        format_yaml(data)
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        table_formatter(*table_args, console)


def cache_records(
    source: YamlRecordSource,
    type_names: List[str],
    file_options: Dict[str, CacheOptions],
    overrides: Dict[str, Any],
) -> List[Dict[str, Any]]:
    """Register every requested type of ``source`` in a fresh registry.

    Args:
        source: Records to cache
        type_names: Types to cache, in order
        file_options: Options per type name from an options file
        overrides: Option values given on the command line; they win over the file

    Returns:
        One entry per type with its options, constants and record count

    Raises:
        DuplicateIdentifierError: If a strict type holds duplicate identifiers
    """
    registry = ConstantRegistry(RegistryConfig(use_options_file=False))
    entries = []
    for name in type_names:
        model_type = source.model_type(name)
        base = file_options.get(name) or file_options.get(DEFAULTS_SECTION) or CacheOptions()
        options = CacheOptions.from_mapping(overrides, base=base)
        table = registry.register(model_type, options)
        entries.append(
            {
                "type": name,
                "options": options.to_dict(),
                "constants": {identifier: record.to_dict() for identifier, record in table.items()},
                "records": len(model_type.all()),
            }
        )
    return entries


@click.command()
@click.argument("records_file", type=click.Path(dir_okay=False))
@click.option("--type", "type_names", multiple=True, help="Model type to cache (repeatable). Defaults to every type.")
@click.option("--key", help="Record attribute the constant names are derived from.")
@click.option("--limit", type=int, help=f"Maximum constant name length (default {CHARACTER_LIMIT}).")
@click.option(
    "--allow-recaching/--no-allow-recaching", default=None, help="Let later records replace earlier duplicates."
)
@click.option("--strict/--no-strict", default=None, help="Fail on duplicate constant names.")
@click.option("--options-file", type=click.Path(dir_okay=False), help="Cache options YAML file.")
@click.pass_context
def show(
    ctx: click.Context,
    records_file: str,
    type_names: Tuple[str, ...],
    key: Optional[str],
    limit: Optional[int],
    allow_recaching: Optional[bool],
    strict: Optional[bool],
    options_file: Optional[str],
) -> None:
    """Cache the records of a YAML file and show the resulting constants."""
    try:
        source = YamlRecordSource(records_file)
        options_path = options_file or get_options_path()
        file_options = load_options_file(options_path) if options_path else {}
    except ConfigurationError as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
    except InvalidOptionsError as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)

    names = list(type_names) or source.type_names()
    unknown = [name for name in names if name not in source.type_names()]
    if unknown:
        handle_error(
            click.BadParameter(f"Unknown type(s): {', '.join(unknown)}. Available: {', '.join(source.type_names())}"),
            ExitCode.INVALID_USAGE,
        )

    overrides = {
        name: value
        for name, value in (("key", key), ("limit", limit), ("allow_recaching", allow_recaching), ("strict", strict))
        if value is not None
    }

    try:
        entries = cache_records(source, names, file_options, overrides)
    except DuplicateIdentifierError as e:
        handle_error(e, ExitCode.DUPLICATE_IDENTIFIER)
    except InvalidOptionsError as e:
        handle_error(e, ExitCode.INVALID_USAGE)

    _emit(ctx, format_constants_json(entries), format_constants_table, entries)


@click.command()
@click.argument("texts", nargs=-1, required=True)
@click.option("--limit", type=int, default=CHARACTER_LIMIT, show_default=True, help="Maximum constant name length.")
@click.pass_context
def name(ctx: click.Context, texts: Tuple[str, ...], limit: int) -> None:
    """Show the constant name each TEXT turns into."""
    limit = CacheOptions(limit=limit).limit
    names: Dict[str, Optional[str]] = {}
    for text in texts:
        identifier = constant_name(text)
        names[text] = identifier[:limit] if identifier else None

    _emit(ctx, format_names_json(names), format_names_table, names)
