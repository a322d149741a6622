# dataprops/conf/settings.py
"""Layered, mapping-like configuration.

Lookups fall through three layers: explicit overrides, the layers given at
construction, then :data:`~dataprops.conf.defaults.DEFAULTS`. Only
upper-case names are picked up from modules and mappings, optionally under a
``NAMESPACE_`` prefix.
"""
from __future__ import annotations

import importlib
import os
from collections import ChainMap
from types import ModuleType
from typing import Any, Iterator, Mapping, MutableMapping, TypeVar

from pydantic import BaseModel

from .defaults import DEFAULTS

CONFIG_MODULE_ENVVAR = "DATAPROPS_CONFIG_MODULE"

M = TypeVar("M", bound=BaseModel)


class Settings(MutableMapping[str, Any]):
    """Layered settings with defaults and optional overlays."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        self._overrides: dict[str, Any] = {}
        self._storage = ChainMap(self._overrides, *(dict(layer) for layer in layers), dict(DEFAULTS))

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._storage[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._overrides[key] = value

    def __delitem__(self, key: str) -> None:
        del self._overrides[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def __repr__(self) -> str:
        return f"Settings(overrides={sorted(self._overrides)!r})"

    # Loading ----------------------------------------------------------
    def update_from_object(self, obj: str | ModuleType | object, *, namespace: str | None = None) -> None:
        """Load upper-case names from a module, a dotted module path, or any object."""
        if isinstance(obj, str):
            obj = importlib.import_module(obj)
        self.update_from_mapping(vars(obj), namespace=namespace)

    def update_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR, *, namespace: str | None = None) -> None:
        module_name = os.environ.get(envvar)
        if module_name:
            self.update_from_object(module_name, namespace=namespace)

    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        self._overrides.update(_filter_by_namespace(mapping, namespace))

    # Views ------------------------------------------------------------
    def typed(self, model: type[M]) -> M:
        """Validate the keys ``model`` declares into a typed settings object."""
        return model.model_validate({k: self[k] for k in model.model_fields if k in self})

    def as_dict(self) -> dict[str, Any]:
        return dict(self._storage)


def _filter_by_namespace(mapping: Mapping[str, Any], namespace: str | None) -> dict[str, Any]:
    if namespace is None:
        return {k: v for k, v in mapping.items() if k.isupper()}

    prefix = f"{namespace}_"
    return {k[len(prefix):]: v for k, v in mapping.items() if k.startswith(prefix)}
