"""Cache database records as named constants of their model class.

This package reads every record of a model type once and binds each record to
an uppercase identifier derived from one of its attributes, so that
``Status.constants.PENDING`` refers to the record named "Pending".
"""

# Version of the package
try:
    from importlib.metadata import version as _version

    __version__ = _version("constant-cache")
except ImportError:
    raise ImportError(
        "Failed to determine package version. This package requires Python 3.8+ "
        "where importlib.metadata is available, or must be installed as a package."
    )

# Import main components for easier access
from .errors import (
    ConfigFileNotFoundError,
    ConfigurationError,
    ConstantCacheError,
    ConstantNotFoundError,
    DuplicateIdentifierError,
    InvalidConfigFormatError,
    InvalidOptionsError,
)
from .mixin import CachesConstants
from .naming import constant_name
from .options import CHARACTER_LIMIT, CacheOptions, load_options_file
from .registry import (
    ConstantRegistry,
    ConstantTable,
    RegistryConfig,
    get_registry,
)
from .sources import Record, YamlRecordSource, read_attribute

# Define public API
__all__ = [
    # Core registry
    "ConstantRegistry",
    "ConstantTable",
    "RegistryConfig",
    "get_registry",
    "CachesConstants",
    # Options
    "CacheOptions",
    "CHARACTER_LIMIT",
    "load_options_file",
    # Records and naming
    "constant_name",
    "read_attribute",
    "Record",
    "YamlRecordSource",
    # Errors
    "ConstantCacheError",
    "ConfigurationError",
    "ConfigFileNotFoundError",
    "InvalidConfigFormatError",
    "InvalidOptionsError",
    "DuplicateIdentifierError",
    "ConstantNotFoundError",
]
