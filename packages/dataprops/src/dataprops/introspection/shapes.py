# dataprops/introspection/shapes.py
"""Classification of a type expression into one closed set of shapes.

Every type reaching the path builder is classified exactly once per
repository; the result (:class:`TypeInfo`) carries the shape and, for
containers, the element type expressions still to be resolved.

Order of precedence:

1. ``META``       -> ``type`` / ``type[X]``: skipped entirely
2. ``UNION``      -> ``X | Y`` / ``Optional[X]``: members classified separately
3. ``ARRAY``      -> ``tuple[X, ...]``
4. ``SIMPLE``     -> scalars: str, bytes, numbers, bool, enums, ``None``, ``Literal``
5. ``ITERABLE``   -> any other iterable class that is not a record type
6. ``TERMINATOR`` -> registered opaque types
7. ``COMPOSITE``  -> everything else that is a class
"""
from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, get_args, get_origin

from pydantic import BaseModel

from ..exceptions import UnsupportedTypeError
from .terminators import TerminatorRegistry
from .typeutils import NoneType, is_union, origin_class, qualified_name, unwrap

logger = logging.getLogger(__name__)

__all__ = [
    "ShapeClassifier",
    "TypeInfo",
    "TypeShape",
    "is_record_type",
    "is_simple_type",
]

SIMPLE_TYPES: tuple[type, ...] = (str, bytes, bytearray, bool, int, float, complex, Enum)


class TypeShape(str, Enum):
    META = "meta"
    UNION = "union"
    ARRAY = "array"
    SIMPLE = "simple"
    ITERABLE = "iterable"
    TERMINATOR = "terminator"
    COMPOSITE = "composite"


@dataclass(frozen=True, slots=True)
class TypeInfo:
    """A type expression together with its cached shape."""

    type: Any
    shape: TypeShape
    name: str
    # element types for ARRAY/ITERABLE, member types for UNION
    args: tuple[Any, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return self.shape in (TypeShape.SIMPLE, TypeShape.TERMINATOR)


def is_simple_type(tp: Any) -> bool:
    if tp is None or tp is NoneType:
        return True
    origin = get_origin(tp)
    if origin is Literal:
        return True
    return origin is None and isinstance(tp, type) and issubclass(tp, SIMPLE_TYPES)


def is_record_type(cls: type) -> bool:
    """Pydantic models and dataclasses are records even when they define ``__iter__``."""
    return dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel)


class ShapeClassifier:
    """Computes and memoizes :class:`TypeInfo` for type expressions."""

    def __init__(self, terminators: TerminatorRegistry) -> None:
        self._terminators = terminators
        self._cache: dict[Any, TypeInfo] = {}

    def classify(self, tp: Any) -> TypeInfo:
        tp = unwrap(tp)
        try:
            return self._cache[tp]
        except KeyError:
            pass
        except TypeError:
            return self._classify(tp)
        info = self._classify(tp)
        self._cache[tp] = info
        logger.debug("Classified %s as %s", info.name, info.shape.value)
        return info

    def _classify(self, tp: Any) -> TypeInfo:
        cls = origin_class(tp)
        args = get_args(tp)
        name = qualified_name(tp)

        if cls is type:
            return TypeInfo(tp, TypeShape.META, name)

        if is_union(tp):
            members = tuple(a for a in args if a is not NoneType)
            return TypeInfo(tp, TypeShape.UNION, name, members)

        if cls is tuple and len(args) == 2 and args[1] is Ellipsis:
            return TypeInfo(tp, TypeShape.ARRAY, name, (args[0],))

        if is_simple_type(tp):
            return TypeInfo(tp, TypeShape.SIMPLE, name)

        if isinstance(cls, type) and issubclass(cls, Iterable) and not is_record_type(cls):
            if issubclass(cls, Mapping):
                elements = args[-1:]
            else:
                elements = tuple(a for a in args if a is not Ellipsis)
            return TypeInfo(tp, TypeShape.ITERABLE, name, elements)

        if self._terminators.is_terminator(tp):
            return TypeInfo(tp, TypeShape.TERMINATOR, name)

        if isinstance(cls, type):
            return TypeInfo(tp, TypeShape.COMPOSITE, name)

        raise UnsupportedTypeError(f"Cannot classify type expression {tp!r}")

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
