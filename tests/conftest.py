"""Shared fixtures for the constant cache tests."""

from pathlib import Path
from typing import Any, Callable, Generator, List

import pytest

from constant_cache import CachesConstants, ConstantRegistry, RegistryConfig


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Keep user options files and the shared registry out of the tests."""
    config_dir = tmp_path / "user-config"
    monkeypatch.setattr(
        "constant_cache.config_paths.platformdirs.user_config_dir",
        lambda app_name: str(config_dir),
    )
    monkeypatch.delenv("CONSTANT_CACHE_OPTIONS_PATH", raising=False)
    ConstantRegistry._default_instance = None
    yield config_dir
    ConstantRegistry._default_instance = None


@pytest.fixture
def registry() -> ConstantRegistry:
    """Create a registry that ignores options files."""
    return ConstantRegistry(RegistryConfig(use_options_file=False))


def make_model(registry: ConstantRegistry, type_name: str = "Status") -> type:
    """Build a model class bound to ``registry`` with an in-memory ``all()`` query."""

    class Model(CachesConstants):
        constant_registry = registry
        rows: List[Any] = []

        def __init__(self, **attributes: Any) -> None:
            self.__dict__.update(attributes)

        @classmethod
        def all(cls) -> List[Any]:
            return list(cls.rows)

        @classmethod
        def create(cls, **attributes: Any) -> Any:
            record = cls(**attributes)
            cls.rows.append(record)
            return record

        def __repr__(self) -> str:
            fields = {k: v for k, v in vars(self).items() if not k.startswith("_")}
            return f"{type(self).__name__}({fields!r})"

    Model.__name__ = type_name
    Model.__qualname__ = type_name
    Model.rows = []
    return Model


@pytest.fixture
def status_model(registry: ConstantRegistry) -> type:
    """A Status model holding Pending, Active and Completed, Late."""
    model = make_model(registry, "Status")
    for name in ("Pending", "Active", "Completed, Late"):
        model.create(name=name)
    return model


@pytest.fixture
def model_factory(registry: ConstantRegistry) -> Callable[..., type]:
    """Return a factory building model classes bound to ``registry``."""

    def _factory(type_name: str = "Status") -> type:
        return make_model(registry, type_name)

    return _factory
