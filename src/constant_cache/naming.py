"""Conversion of free text into constant identifiers."""

import re
from typing import Callable, Optional

# Normalizer signature: free text in, identifier (or None) out
Normalizer = Callable[[str], Optional[str]]

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w]")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")


def constant_name(text: str) -> Optional[str]:
    """Turn arbitrary text into an uppercase identifier.

    Whitespace runs become a single underscore, any other non-word
    character is dropped and repeated underscores are collapsed.

    Examples:
        >>> constant_name("Completed, Late")
        'COMPLETED_LATE'
        >>> constant_name("  ") is None
        True

    Args:
        text: Source text

    Returns:
        The identifier, or None when nothing usable remains
    """
    value = _WHITESPACE.sub("_", text.strip())
    value = _NON_WORD.sub("", value)
    value = _REPEATED_UNDERSCORES.sub("_", value).upper()
    return value or None
