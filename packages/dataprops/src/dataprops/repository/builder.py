# dataprops/repository/builder.py
"""Recursive property-path discovery over a type graph."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, TypeVar

from ..exceptions import UnsupportedTypeError
from ..introspection.generics import TypeBindings, bindings_for, resolve, resolve_element
from ..introspection.members import MemberSource, PropertyDescriptor
from ..introspection.shapes import ShapeClassifier, TypeShape
from ..introspection.typeutils import origin_class, qualified_name, unwrap

logger = logging.getLogger(__name__)

__all__ = ["CycleGuard", "PathBuilder"]

# Relative path meaning "the value itself is the leaf".
_SELF = ""


class CycleGuard:
    """Types currently being expanded within one top-level traversal."""

    def __init__(self) -> None:
        self._active: set[Any] = set()

    def __contains__(self, tp: Any) -> bool:
        return tp in self._active

    def __len__(self) -> int:
        return len(self._active)

    @contextmanager
    def entering(self, tp: Any) -> Iterator[None]:
        self._active.add(tp)
        try:
            yield
        finally:
            self._active.discard(tp)


class PathBuilder:
    """Builds the sorted, de-duplicated leaf paths of a type.

    ``build`` is the internal entry point used for nested composites: it
    shares the caller's cycle guard and bindings and never touches the
    repository cache, since a nested result depends on the active
    expansion stack.
    """

    def __init__(self, classifier: ShapeClassifier, member_source: MemberSource) -> None:
        self.classifier = classifier
        self.member_source = member_source

    def build(
        self,
        tp: Any,
        guard: CycleGuard,
        bindings: Mapping[str, Any] | None = None,
    ) -> list[str]:
        bindings = bindings_for(tp, bindings)
        if tp in guard:
            logger.debug("Cycle cut at %s", qualified_name(tp))
            return []
        with guard.entering(tp):
            return self._build_property_list(tp, guard, bindings)

    def _build_property_list(self, tp: Any, guard: CycleGuard, bindings: TypeBindings) -> list[str]:
        cls = origin_class(tp)
        if not isinstance(cls, type):
            raise UnsupportedTypeError(f"Cannot enumerate properties of {tp!r}")

        paths: list[str] = []
        seen: set[str] = set()
        for prop in self.member_source(cls):
            for rel in self._property_paths(prop, guard, bindings):
                path = prop.name if rel == _SELF else f"{prop.name}.{rel}"
                if path not in seen:
                    seen.add(path)
                    paths.append(path)
        paths.sort()
        return paths

    def _property_paths(
        self, prop: PropertyDescriptor, guard: CycleGuard, bindings: TypeBindings
    ) -> list[str]:
        return self._member_paths(prop.annotation, guard, bindings, prop.owner)

    def _member_paths(self, annotation: Any, guard: CycleGuard, bindings: TypeBindings, owner: Any) -> list[str]:
        tp = resolve(unwrap(annotation), bindings)
        if isinstance(tp, TypeVar):
            # an unbound bare type variable degrades to its bound, or to object
            tp = tp.__bound__ if isinstance(tp.__bound__, type) else object
        return self._value_paths(tp, guard, bindings, owner)

    def _value_paths(self, tp: Any, guard: CycleGuard, bindings: TypeBindings, owner: Any) -> list[str]:
        info = self.classifier.classify(tp)

        if info.shape is TypeShape.META:
            return []
        if info.is_leaf:
            return [_SELF]
        if info.shape is TypeShape.UNION:
            return _merge(self._member_paths(m, guard, bindings, owner) for m in info.args)
        if info.shape in (TypeShape.ARRAY, TypeShape.ITERABLE):
            return _merge(
                self._value_paths(resolve_element(unwrap(arg), bindings, owner), guard, bindings, owner)
                for arg in info.args
            )
        return self.build(info.type, guard, bindings)


def _merge(groups) -> list[str]:
    merged: list[str] = []
    for group in groups:
        for path in group:
            if path not in merged:
                merged.append(path)
    return merged
