"""Mixin exposing cached constants on a model class.

    class Status(Base, CachesConstants):
        ...

    Status.cache_constants()
    Status.constants.PENDING            # the 'Pending' status record

    class State(Base, CachesConstants):
        ...

    State.cache_constants(key="abbreviation", limit=2)
    State.constant("CA")

Model classes must offer an ``all()`` query, or the registry they use must be
configured with a fetcher that knows how to load them.
"""

from typing import Any, Optional

from .options import CacheOptions, OptionsLike
from .registry import ConstantRegistry, ConstantTable, get_registry


class _ConstantsAccessor:
    """Class-level access to the constant table of the owning model class."""

    def __get__(self, instance: Any, owner: type) -> ConstantTable:
        return owner._constant_registry().table(owner)


class CachesConstants:
    """Cache a model class's records as constants.

    Bindings live in a :class:`ConstantRegistry`; set ``constant_registry``
    on the class to use a registry other than the shared default one.
    """

    constant_registry: Optional[ConstantRegistry] = None

    constants = _ConstantsAccessor()

    @classmethod
    def _constant_registry(cls) -> ConstantRegistry:
        return cls.constant_registry or get_registry()

    @classmethod
    def cache_constants(cls, options: OptionsLike = None, records: Any = None, **option_values: Any) -> ConstantTable:
        """Cache every record of this class as a constant.

        Options may be passed as a mapping, a ``CacheOptions`` or as keyword
        arguments; keyword arguments win.

        Raises:
            DuplicateIdentifierError: If the class is cached strictly and two
                records derive the same identifier
        """
        if option_values:
            base = options if isinstance(options, CacheOptions) else CacheOptions.coerce(options)
            options = CacheOptions.from_mapping(option_values, base=base)
        return cls._constant_registry().register(cls, options, records=records)

    @classmethod
    def cache_options(cls) -> Optional[CacheOptions]:
        """Options this class was cached with, or None."""
        return cls._constant_registry().options_for(cls)

    @classmethod
    def constant(cls, identifier: str, *default: Any) -> Any:
        """Return the record cached as ``identifier``.

        An optional second argument is returned instead of raising
        ``ConstantNotFoundError`` when nothing is cached under the name.
        """
        return cls._constant_registry().lookup(cls, identifier, *default)

    @property
    def constant_name(self) -> Optional[str]:
        """Identifier this record derives; computed once."""
        return self._constant_registry().identifier_for(self, type(self))

    def set_instance_as_constant(self) -> Optional[str]:
        """Bind this record to its identifier.

        Returns:
            The identifier, or None when the record was not bound
        """
        return self._constant_registry().bind_instance(self, type(self))
