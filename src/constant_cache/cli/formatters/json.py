"""JSON output formatter for CLI."""

import datetime as _dt
import json
import sys
from enum import Enum as _Enum
from typing import Any, Dict, List, Optional, TextIO


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - datetime/date -> ISO 8601 string
    - Enum -> value (fallback to name)
    - Fallback -> str(obj)
    """
    if isinstance(obj, (_dt.datetime, _dt.date)):
        return obj.isoformat()
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        sort_keys=True,
        default=_default_serializer,
    )
    output.write("\n")


def format_constants_json(types: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Format cached constants of every type for structured output.

    Args:
        types: One entry per model type with ``type``, ``options``,
            ``constants`` and ``records`` keys

    Returns:
        Formatted data structure
    """
    return {
        "types": [
            {
                "type": entry["type"],
                "options": entry["options"],
                "constants": entry["constants"],
                "count": len(entry["constants"]),
                "unbound": entry["records"] - len(entry["constants"]),
            }
            for entry in types
        ],
        "count": sum(len(entry["constants"]) for entry in types),
    }


def format_names_json(names: Dict[str, Optional[str]]) -> Dict[str, Any]:
    """Format text to identifier conversions for structured output."""
    return {"names": [{"text": text, "identifier": identifier} for text, identifier in names.items()]}


def format_options_json(options: Dict[str, Dict[str, Any]], path: Optional[str]) -> Dict[str, Any]:
    """Format effective cache options for structured output."""
    return {"options_file": path, "types": options, "count": len(options)}


def format_config_paths_json(paths: Dict[str, Any]) -> Dict[str, Any]:
    """Format options file paths for structured output."""
    return {
        "options_paths": paths,
        "resolution_order": [
            "CONSTANT_CACHE_OPTIONS_PATH environment variable",
            "User config directory",
            "Built-in defaults",
        ],
    }
