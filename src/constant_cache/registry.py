"""Core registry functionality for caching records as constants.

This module provides the ConstantRegistry class, which reads every record of
a model type once and binds each record to an identifier derived from one of
its attributes.

Typical usage:

    from constant_cache import get_registry  # shared default registry

    registry = get_registry()
    registry.register(Status)
    registry.lookup(Status, "PENDING")

    # or, for an isolated registry with its own options file and fetcher
    from constant_cache import ConstantRegistry, RegistryConfig
"""

import itertools
import threading
import weakref
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .config_paths import get_options_path
from .errors import ConstantNotFoundError, DuplicateIdentifierError
from .logging import LogEvent, get_logger, log_debug, log_info, log_warning
from .naming import Normalizer, constant_name
from .options import DEFAULTS_SECTION, CacheOptions, OptionsLike, read_options_file
from .sources import Fetcher, fetch_all, read_attribute

# Create module logger
logger = get_logger("registry")

_MISSING = object()

# Instance attribute holding ((generation, options), identifier)
_IDENTIFIER_ATTR = "_constant_cache_identifier"

# Every table and every registration pass draws a fresh generation
_generations = itertools.count(1)

MemoToken = Tuple[int, CacheOptions]


class RegistryConfig:
    """Configuration for the constant registry."""

    def __init__(
        self,
        options_path: Optional[str] = None,
        fetcher: Optional[Fetcher] = None,
        normalizer: Optional[Normalizer] = None,
        use_options_file: bool = True,
    ):
        """Initialize registry configuration.

        Args:
            options_path: Custom path to the cache options YAML file. If None,
                          the default location is used when it exists.
            fetcher: Function returning every record of a model type.
                     Defaults to calling ``model_type.all()``.
            normalizer: Function turning attribute text into an identifier.
            use_options_file: Whether to read per-type options from a file at all.
        """
        self.use_options_file = use_options_file
        self.options_path = options_path or (get_options_path() if use_options_file else None)
        self.fetcher = fetcher or fetch_all
        self.normalizer = normalizer or constant_name


class ConstantTable(Mapping[str, Any]):
    """Identifier to record bindings of one model type.

    Read-only for callers; the owning registry mutates it during
    registration. Bindings are reachable both as items and as attributes::

        table["PENDING"] is table.PENDING
    """

    def __init__(self, model_type: type, options: Optional[CacheOptions] = None) -> None:
        self._model_type = model_type
        self._options = options
        self._bindings: Dict[str, Any] = {}
        self._generation = next(_generations)
        # id(record) -> (weak reference, token, identifier), for records without a __dict__
        self._identifiers: Dict[int, Tuple[weakref.ref, MemoToken, str]] = {}

    @property
    def model_type(self) -> type:
        return self._model_type

    @property
    def options(self) -> Optional[CacheOptions]:
        """Active options, or None when the type has not been registered."""
        return self._options

    def identifiers(self) -> List[str]:
        """Bound identifiers, in binding order."""
        return list(self._bindings)

    def _memo_token(self, options: CacheOptions) -> MemoToken:
        return (self._generation, options)

    def _memoized(self, instance: Any, token: MemoToken) -> Optional[str]:
        state = getattr(instance, "__dict__", None)
        if isinstance(state, dict):
            cached = state.get(_IDENTIFIER_ATTR)
        else:
            entry = self._identifiers.get(id(instance))
            cached = entry[1:] if entry is not None and entry[0]() is instance else None
        if cached is not None and cached[0] == token:
            return cached[1]
        return None

    def _memoize(self, instance: Any, token: MemoToken, identifier: str) -> None:
        state = getattr(instance, "__dict__", None)
        if isinstance(state, dict):
            state[_IDENTIFIER_ATTR] = (token, identifier)
            return

        key = id(instance)
        identifiers = self._identifiers
        try:
            ref = weakref.ref(instance, lambda _ref: identifiers.pop(key, None))
        except TypeError:
            # Plain mappings and tuples cannot be weakly referenced; derived on every read
            return
        identifiers[key] = (ref, token, identifier)

    def __getitem__(self, identifier: str) -> Any:
        try:
            return self._bindings[identifier]
        except KeyError:
            raise ConstantNotFoundError(
                f"{self._model_type.__name__} has no constant '{identifier}'",
                identifier=identifier,
                model_type=self._model_type,
            ) from None

    def __getattr__(self, identifier: str) -> Any:
        if identifier.startswith("_"):
            raise AttributeError(identifier)
        return self[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"<ConstantTable {self._model_type.__name__}: {', '.join(self._bindings) or 'empty'}>"


class ConstantRegistry:
    """Registry of record constants, scoped per model type."""

    _default_instance: Optional["ConstantRegistry"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "ConstantRegistry":
        """Get the default registry instance with standard configuration.

        Returns:
            The default ConstantRegistry instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                cls._default_instance = cls()
            return cls._default_instance

    def __init__(self, config: Optional[RegistryConfig] = None):
        """Initialize a new registry instance.

        Args:
            config: Configuration for this registry instance. If None, default
                   configuration is used.
        """
        self.config = config or RegistryConfig()
        self._tables: Dict[type, ConstantTable] = {}
        # id(bound record) -> model type it is bound under
        self._owners: Dict[int, type] = {}
        self._file_options: Optional[Dict[str, CacheOptions]] = None

    def _load_file_options(self) -> Dict[str, CacheOptions]:
        if self._file_options is None:
            result = read_options_file(self.config.options_path)
            if not result.success:
                log_warning(
                    LogEvent.CONSTANT_REGISTRY,
                    "Ignoring cache options file; using defaults",
                    path=result.path,
                    error=result.error,
                )
            self._file_options = result.data or {}
        return self._file_options

    def _resolve_options(self, model_type: type, options: OptionsLike) -> CacheOptions:
        if options is not None:
            return CacheOptions.coerce(options)
        file_options = self._load_file_options()
        resolved = file_options.get(model_type.__name__) or file_options.get(DEFAULTS_SECTION)
        return resolved or CacheOptions()

    def table(self, model_type: type) -> ConstantTable:
        """Return the constant table of ``model_type``, empty if never registered."""
        table = self._tables.get(model_type)
        if table is None:
            table = self._tables[model_type] = ConstantTable(model_type)
        return table

    def options_for(self, model_type: type) -> Optional[CacheOptions]:
        """Return the active options of ``model_type``, or None if never registered."""
        table = self._tables.get(model_type)
        return table.options if table is not None else None

    def registered_types(self) -> List[type]:
        """Model types registered so far, in registration order."""
        return [t for t, table in self._tables.items() if table.options is not None]

    def register(
        self,
        model_type: type,
        options: OptionsLike = None,
        records: Optional[Iterable[Any]] = None,
    ) -> ConstantTable:
        """Cache every record of ``model_type`` as a constant.

        Options replace any options the type was registered with before.
        When ``options`` is None, options configured for the type's name in
        the options file apply, else the defaults. Identifiers are derived
        afresh for every registration; bindings made by earlier
        registrations stay in place.

        Args:
            model_type: The model type to cache
            options: ``CacheOptions`` or a mapping of option values
            records: Records to cache instead of fetching them

        Returns:
            The constant table of the type

        Raises:
            DuplicateIdentifierError: If the type is strict and two records
                derive the same identifier. Records after the duplicate stay
                unregistered.
            InvalidOptionsError: If the options are invalid
        """
        table = self.table(model_type)
        table._options = self._resolve_options(model_type, options)
        table._generation = next(_generations)

        if records is None:
            records = self.config.fetcher(model_type)

        log_debug(
            LogEvent.CONSTANT_REGISTRY,
            f"Caching constants for {model_type.__name__}",
            model_type=model_type.__name__,
            options=table._options.to_dict(),
        )
        for record in records:
            self.bind_instance(record, model_type)

        log_info(
            LogEvent.CONSTANT_REGISTRY,
            f"Cached {len(table)} constant(s) for {model_type.__name__}",
            model_type=model_type.__name__,
            count=len(table),
        )
        return table

    def _model_type_of(self, instance: Any, model_type: Optional[type]) -> type:
        if model_type is not None:
            return model_type
        return self._owners.get(id(instance), type(instance))

    def identifier_for(self, instance: Any, model_type: Optional[type] = None) -> Optional[str]:
        """Return the identifier ``instance`` derives, computing it once per registration.

        Does not register anything. Types that were never registered use
        their configured or default options. The identifier is kept on the
        record itself when it has a ``__dict__``, else weakly by the table;
        records that support neither (plain dicts) derive it on every call.

        Args:
            instance: The record
            model_type: The record's model type. Defaults to the type the
                record is bound under, else ``type(instance)``; pass it for
                unbound records that are not instances of their model type.

        Returns:
            The identifier, or None when the source attribute is empty or not a string
        """
        model_type = self._model_type_of(instance, model_type)
        table = self.table(model_type)
        options = table.options or self._resolve_options(model_type, None)
        token = table._memo_token(options)
        cached = table._memoized(instance, token)
        if cached is not None:
            return cached

        value = read_attribute(instance, options.key)
        if not isinstance(value, str) or value == "":
            return None

        identifier = self.config.normalizer(value)
        if not identifier:
            log_debug(
                LogEvent.IDENTIFIER,
                f"'{value}' yields no identifier",
                model_type=model_type.__name__,
                value=value,
            )
            return None
        identifier = identifier[: options.limit]
        table._memoize(instance, token, identifier)
        return identifier

    def bind_instance(self, instance: Any, model_type: Optional[type] = None) -> Optional[str]:
        """Bind one record to its identifier, honoring the type's duplicate policy.

        Args:
            instance: The record
            model_type: The record's model type (defaults as for :meth:`identifier_for`)

        Returns:
            The identifier the record is bound to, or None if it was not bound

        Raises:
            DuplicateIdentifierError: If the type is strict and the identifier
                already points at another record
        """
        model_type = self._model_type_of(instance, model_type)
        table = self.table(model_type)
        options = table.options or self._resolve_options(model_type, None)

        identifier = self.identifier_for(instance, model_type)
        if identifier is None:
            return None

        existing = table._bindings.get(identifier, _MISSING)
        if existing is not _MISSING and options.allow_recaching:
            log_debug(
                LogEvent.CONSTANT_BINDING,
                f"Recaching {model_type.__name__}.{identifier}",
                model_type=model_type.__name__,
                identifier=identifier,
            )
            del table._bindings[identifier]
            self._forget_owner(existing, table)
        elif existing is not _MISSING and existing is not instance and existing != instance:
            if options.strict:
                raise DuplicateIdentifierError(
                    f"{model_type.__name__}.{identifier} is already bound to {existing!r}",
                    identifier=identifier,
                    model_type=model_type,
                    existing=existing,
                    duplicate=instance,
                )
            else:
                log_warning(
                    LogEvent.CONSTANT_BINDING,
                    f"{model_type.__name__}.{identifier} is already bound; keeping the first record",
                    model_type=model_type.__name__,
                    identifier=identifier,
                )
                return None

        if identifier not in table._bindings:
            table._bindings[identifier] = instance
            self._owners[id(instance)] = model_type
        return identifier

    def _forget_owner(self, record: Any, table: ConstantTable) -> None:
        # Bound records stay alive through the table, so their ids are stable until unbound
        if any(bound is record for bound in table._bindings.values()):
            return
        if self._owners.get(id(record)) is table.model_type:
            del self._owners[id(record)]

    def lookup(self, model_type: type, identifier: str, default: Any = _MISSING) -> Any:
        """Return the record bound to ``identifier``.

        Raises:
            ConstantNotFoundError: If nothing is bound and no default is given
        """
        table = self.table(model_type)
        if identifier in table:
            return table[identifier]
        if default is not _MISSING:
            return default
        return table[identifier]

    def reset(self, model_type: Optional[type] = None) -> None:
        """Forget options, bindings and identifiers of one type, or of all types."""
        if model_type is None:
            self._tables.clear()
            self._owners.clear()
            self._file_options = None
            return

        table = self._tables.pop(model_type, None)
        if table is not None:
            for record in table._bindings.values():
                if self._owners.get(id(record)) is model_type:
                    del self._owners[id(record)]


def get_registry() -> ConstantRegistry:
    """Return the shared default registry."""
    return ConstantRegistry.get_default()
