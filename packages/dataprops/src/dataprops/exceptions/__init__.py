"""Unified exception hierarchy."""

from .base import DataPropsError
from .introspection_exceptions import (
    IntrospectionError,
    UnresolvedTypeVariableError,
    UnsupportedTypeError,
)
from .registry_exceptions import RegistryError, RegistryFrozenError
from .service_exceptions import ServiceDestroyedError

__all__ = [
    "DataPropsError",
    "IntrospectionError",
    "UnresolvedTypeVariableError",
    "UnsupportedTypeError",
    "RegistryError",
    "RegistryFrozenError",
    "ServiceDestroyedError",
]
