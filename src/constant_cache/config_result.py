"""Configuration loading result object.

This module defines a standard result object for options loading operations.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ConfigResult:
    """Result of an options loading operation.

    Attributes:
        success: Whether the operation was successful
        data: Options per model type name (if successful)
        error: Error message (if unsuccessful)
        exception: Original exception (if an error occurred)
        path: Path to the options file (if applicable)
    """

    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    exception: Optional[Exception] = None
    path: Optional[str] = None
