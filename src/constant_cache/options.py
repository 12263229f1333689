"""Cache options and the options file loader.

Cache options decide how a model type's records turn into constants. They are
passed to :py:meth:`ConstantRegistry.register` directly, or read from a YAML
options file keyed by model type name::

    defaults:
      limit: 32
    Status: {}
    State:
      key: abbreviation
      limit: 2

Entries under ``defaults`` apply to every type, named or not.
"""

from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .config_result import ConfigResult
from .errors import (
    ConfigFileNotFoundError,
    ConfigurationError,
    InvalidConfigFormatError,
    InvalidOptionsError,
)
from .logging import LogEvent, log_debug, log_error

# Identifiers longer than this are truncated unless a type says otherwise
CHARACTER_LIMIT = 64

DEFAULTS_SECTION = "defaults"

OPTION_NAMES = ("key", "limit", "allow_recaching", "strict")

OptionsLike = Union["CacheOptions", Mapping[str, Any], None]


@dataclass(frozen=True)
class CacheOptions:
    """Options controlling how one model type is cached.

    Attributes:
        key: Name of the record attribute the identifier is derived from
        limit: Maximum identifier length; non-positive values fall back to
            ``CHARACTER_LIMIT``
        allow_recaching: Whether a later record replaces an earlier one that
            derived the same identifier
        strict: Whether such a collision raises ``DuplicateIdentifierError``
            instead of keeping the first record
    """

    key: str = "name"
    limit: int = CHARACTER_LIMIT
    allow_recaching: bool = False
    strict: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise InvalidOptionsError(f"Option 'key' must be a non-empty string, got {self.key!r}", option="key")
        if self.limit is None:
            object.__setattr__(self, "limit", CHARACTER_LIMIT)
        elif isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise InvalidOptionsError(f"Option 'limit' must be an integer, got {self.limit!r}", option="limit")
        elif self.limit <= 0:
            object.__setattr__(self, "limit", CHARACTER_LIMIT)
        for flag in ("allow_recaching", "strict"):
            if not isinstance(getattr(self, flag), bool):
                raise InvalidOptionsError(
                    f"Option '{flag}' must be a boolean, got {getattr(self, flag)!r}",
                    option=flag,
                )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["CacheOptions"] = None) -> "CacheOptions":
        """Build options from a mapping of option names to values.

        Args:
            data: Option values; missing options come from ``base``
            base: Options to start from (defaults when None)

        Returns:
            The validated options

        Raises:
            InvalidOptionsError: If an option name is unknown or a value is invalid
        """
        unknown = sorted(str(name) for name in data if name not in OPTION_NAMES)
        if unknown:
            raise InvalidOptionsError(f"Unknown cache option(s): {', '.join(unknown)}")
        return replace(base or cls(), **dict(data))

    @classmethod
    def coerce(cls, options: OptionsLike) -> "CacheOptions":
        """Accept options given as an instance, a mapping or None."""
        if options is None:
            return cls()
        if isinstance(options, CacheOptions):
            return options
        if isinstance(options, Mapping):
            return cls.from_mapping(options)
        raise InvalidOptionsError(f"Cache options must be a mapping, got {type(options).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        """Return the options as a plain dictionary."""
        return asdict(self)


def parse_options(data: Any, path: Optional[str] = None) -> Dict[str, CacheOptions]:
    """Parse the content of an options file.

    Args:
        data: Parsed YAML document
        path: Path of the file, for error messages

    Returns:
        Options per model type name, plus the ``defaults`` entry when present

    Raises:
        InvalidConfigFormatError: If the document or a section is not a mapping
        InvalidOptionsError: If a section holds unknown or invalid options
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigFormatError(
            f"Invalid options format: expected dictionary, got {type(data).__name__}",
            path=path,
        )

    raw_defaults = data.get(DEFAULTS_SECTION) or {}
    if not isinstance(raw_defaults, dict):
        raise InvalidConfigFormatError(
            f"Invalid '{DEFAULTS_SECTION}' section: expected dictionary, got {type(raw_defaults).__name__}",
            path=path,
        )
    defaults = CacheOptions.from_mapping(raw_defaults)

    result: Dict[str, CacheOptions] = {}
    if DEFAULTS_SECTION in data:
        result[DEFAULTS_SECTION] = defaults
    for name, section in data.items():
        if name == DEFAULTS_SECTION:
            continue
        section = section or {}
        if not isinstance(section, dict):
            raise InvalidConfigFormatError(
                f"Invalid options for '{name}': expected dictionary, got {type(section).__name__}",
                path=path,
            )
        result[str(name)] = CacheOptions.from_mapping(section, base=defaults)
    return result


def load_options_file(path: Union[str, Path]) -> Dict[str, CacheOptions]:
    """Load an options file, raising on any problem.

    Args:
        path: Path to the YAML options file

    Returns:
        Options per model type name

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        InvalidConfigFormatError: If the file is not valid YAML or has the wrong shape
        InvalidOptionsError: If a section holds invalid options
    """
    path = str(path)
    if not Path(path).is_file():
        raise ConfigFileNotFoundError(f"Options file not found: {path}", path=path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidConfigFormatError(f"YAML parsing error in {path}: {e}", path=path) from e
    return parse_options(data, path=path)


def read_options_file(path: Optional[str]) -> ConfigResult:
    """Load an options file without raising.

    Args:
        path: Path to the YAML options file, or None for no file

    Returns:
        ConfigResult: Result of the loading operation
    """
    if path is None:
        return ConfigResult(success=True, data={})
    try:
        data = load_options_file(path)
    except (ConfigurationError, InvalidOptionsError) as e:
        log_error(LogEvent.CONFIG_LOADING, f"Failed to load cache options: {e}", path=path)
        return ConfigResult(success=False, error=str(e), exception=e, path=path)
    except OSError as e:
        log_error(LogEvent.CONFIG_LOADING, f"Error reading cache options: {e}", path=path)
        return ConfigResult(success=False, error=str(e), exception=e, path=path)

    log_debug(LogEvent.CONFIG_LOADING, "Loaded cache options", path=path, types=sorted(data))
    return ConfigResult(success=True, data=data, path=path)
