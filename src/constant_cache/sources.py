"""Record access and record sources.

The registry only needs two things from a persistence layer: a way to fetch
every record of a model type, and a way to read one attribute of a record.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type, Union

import yaml

from .errors import ConfigFileNotFoundError, InvalidConfigFormatError

# Fetcher signature: model type in, its records out (in storage order)
Fetcher = Callable[[type], Iterable[Any]]

# Type name used for a records file holding a bare list
DEFAULT_TYPE_NAME = "Record"


def read_attribute(record: Any, name: str) -> Any:
    """Read one attribute of a record.

    Records exposing ``get_attribute(name)`` are asked through it, mappings
    are indexed, anything else is read with ``getattr``. Missing attributes
    read as None.
    """
    get_attribute = getattr(record, "get_attribute", None)
    if callable(get_attribute):
        return get_attribute(name)
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def fetch_all(model_type: type) -> List[Any]:
    """Fetch every record of ``model_type`` through its ``all()`` query.

    Raises:
        TypeError: If the type has no ``all()`` query
    """
    query = getattr(model_type, "all", None)
    if not callable(query):
        raise TypeError(f"{model_type.__name__} has no all() query; pass records or a fetcher explicitly")
    return list(query())


class Record:
    """A plain record whose attributes come from a mapping."""

    _records: List["Record"] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._records = []

    def __init__(self, **attributes: Any) -> None:
        self.__dict__.update(attributes)

    @classmethod
    def all(cls) -> List["Record"]:
        """Return every record of this type, in load order."""
        return list(cls._records)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({fields})"


class YamlRecordSource:
    """Records of one or more model types read from a YAML file.

    The document is either a list of mappings (records of a single type
    named ``Record``) or a mapping of type name to such a list::

        Status:
          - name: Pending
          - name: Active
        State:
          - {name: California, abbreviation: CA}
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """Load the records file.

        Args:
            path: Path to the YAML records file

        Raises:
            ConfigFileNotFoundError: If the file does not exist
            InvalidConfigFormatError: If the file is not valid YAML or has the wrong shape
        """
        self.path = str(path)
        if not Path(self.path).is_file():
            raise ConfigFileNotFoundError(f"Records file not found: {self.path}", path=self.path)
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigFormatError(f"YAML parsing error in {self.path}: {e}", path=self.path) from e

        if data is None:
            data = {}
        if isinstance(data, list):
            data = {DEFAULT_TYPE_NAME: data}
        if not isinstance(data, dict):
            raise InvalidConfigFormatError(
                f"Invalid records format: expected list or dictionary, got {type(data).__name__}",
                path=self.path,
            )

        self._types: Dict[str, Type[Record]] = {}
        for name, rows in data.items():
            self._types[str(name)] = self._build_type(str(name), rows or [])

    def _build_type(self, name: str, rows: Any) -> Type[Record]:
        if not isinstance(rows, list):
            raise InvalidConfigFormatError(
                f"Invalid records for '{name}': expected list, got {type(rows).__name__}",
                path=self.path,
                expected_type="list",
            )
        model_type = type(name, (Record,), {})
        for row in rows:
            if not isinstance(row, dict):
                raise InvalidConfigFormatError(
                    f"Invalid record in '{name}': expected dictionary, got {type(row).__name__}",
                    path=self.path,
                )
            model_type._records.append(model_type(**{str(k): v for k, v in row.items()}))
        return model_type

    def type_names(self) -> List[str]:
        """Names of the model types in the file, in file order."""
        return list(self._types)

    def model_type(self, name: str) -> Type[Record]:
        """Return the model type built for ``name``.

        Raises:
            KeyError: If the file holds no such type
        """
        return self._types[name]

    def records(self, name: Optional[str] = None) -> List[Record]:
        """Return the records of one type, or of every type when name is None."""
        if name is not None:
            return self._types[name].all()
        return [record for model_type in self._types.values() for record in model_type.all()]
