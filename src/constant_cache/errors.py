"""Error types for the constant cache.

This module defines the error types raised while caching records as
constants and while loading cache options.
"""

from typing import Any, Optional


class ConstantCacheError(Exception):
    """Base class for all constant cache errors.

    This is the parent class for all library-specific exceptions.
    """

    pass


class ConfigurationError(ConstantCacheError):
    """Base class for configuration-related errors.

    This is raised for errors related to loading, parsing or validating
    cache options.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the options file that caused the error
        """
        super().__init__(message)
        self.message = message
        self.path = path


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when an options file that was asked for does not exist.

    Examples:
        >>> try:
        ...     load_options_file("/missing/cache_options.yml")
        ... except ConfigFileNotFoundError as e:
        ...     print(f"Options file not found: {e.path}")
    """

    pass


class InvalidConfigFormatError(ConfigurationError):
    """Raised when an options file has an invalid format.

    Examples:
        >>> try:
        ...     load_options_file("broken.yml")
        ... except InvalidConfigFormatError as e:
        ...     print(f"Invalid options format: {e}")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        expected_type: str = "dict",
    ) -> None:
        """Initialize invalid format error.

        Args:
            message: Error message
            path: Optional path to the options file
            expected_type: Expected type of the offending section
        """
        super().__init__(message, path)
        self.expected_type = expected_type


class InvalidOptionsError(ConstantCacheError, ValueError):
    """Raised when cache options contain unknown keys or badly typed values.

    Examples:
        >>> CacheOptions.from_mapping({"lenght": 2})
        Traceback (most recent call last):
        ...
        InvalidOptionsError: Unknown cache option(s): lenght
    """

    def __init__(self, message: str, option: Optional[str] = None) -> None:
        """Initialize invalid options error.

        Args:
            message: Error message
            option: Name of the offending option, if a single one
        """
        super().__init__(message)
        self.message = message
        self.option = option


class DuplicateIdentifierError(ConstantCacheError):
    """Raised when a derived identifier is already bound to another record.

    Only raised for types cached with ``strict=True`` and without
    ``allow_recaching``. The registration pass stops at the first duplicate,
    leaving the remaining records unregistered.

    Examples:
        >>> try:
        ...     registry.register(Status, {"strict": True})
        ... except DuplicateIdentifierError as e:
        ...     print(f"{e.identifier} already points at {e.existing!r}")
    """

    def __init__(
        self,
        message: str,
        identifier: str,
        model_type: Optional[type] = None,
        existing: Any = None,
        duplicate: Any = None,
    ) -> None:
        """Initialize duplicate identifier error.

        Args:
            message: Error message
            identifier: The identifier both records derive
            model_type: The model type being cached
            existing: The record already bound to the identifier
            duplicate: The record that failed to bind
        """
        super().__init__(message)
        self.message = message
        self.identifier = identifier
        self.model_type = model_type
        self.existing = existing
        self.duplicate = duplicate


class ConstantNotFoundError(ConstantCacheError, KeyError, AttributeError):
    """Raised when looking up an identifier that is not bound.

    Subclasses both ``KeyError`` and ``AttributeError`` so that mapping
    access and ``getattr(table, name, default)`` behave as usual.

    Examples:
        >>> try:
        ...     Status.constants.ARCHIVED
        ... except ConstantNotFoundError as e:
        ...     print(f"No constant {e.identifier}")
    """

    def __init__(
        self,
        message: str,
        identifier: str,
        model_type: Optional[type] = None,
    ) -> None:
        """Initialize constant not found error.

        Args:
            message: Error message
            identifier: The identifier that was looked up
            model_type: The model type that was searched
        """
        super().__init__(message)
        self.message = message
        self.identifier = identifier
        self.model_type = model_type

    def __str__(self) -> str:
        """Return string representation of the error.

        Returns:
            Error message
        """
        return self.message
