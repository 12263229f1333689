"""CLI commands package."""

# Import all command modules to make them available
from . import config, constants

__all__ = ["config", "constants"]
