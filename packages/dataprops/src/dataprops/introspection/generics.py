# dataprops/introspection/generics.py
"""Type-variable binding resolution.

A binding map goes from type-parameter *name* to the concrete type supplied
by the usage context. Maps are built per traversal: entering a nested type
merges its own bindings over the parent's, so parent bindings stay visible
unless shadowed.

Example::

    class Page(Generic[T]):
        items: list[T]

    class UserPage(Page[User]): ...

    bindings_for(UserPage)   # {"T": User}
    bindings_for(Page[User]) # {"T": User}
"""
from __future__ import annotations

from typing import Any, Generic, Mapping, Protocol, TypeVar, get_args, get_origin

from ..exceptions import UnresolvedTypeVariableError, UnsupportedTypeError

__all__ = [
    "TypeBindings",
    "bindings_for",
    "resolve",
    "resolve_element",
]

TypeBindings = dict[str, Any]

_SKIPPED_BASES = (Generic, Protocol)


def bindings_for(tp: Any, parent: Mapping[str, Any] | None = None) -> TypeBindings:
    """Return ``parent`` merged with the type-parameter bindings declared by ``tp``.

    Alias arguments (``Box[int]``) bind the origin's own parameters; then the
    class hierarchy is walked most-derived first, binding every generic base's
    parameters to what the subclass supplied. Parameters that only resolve to
    another unbound type variable are left out.
    """
    bindings: TypeBindings = dict(parent or {})
    origin = get_origin(tp)
    cls = origin if origin is not None else tp
    if not isinstance(cls, type):
        return bindings

    own: TypeBindings = {}
    if origin is not None:
        params = getattr(cls, "__parameters__", ())
        for param, arg in zip(params, get_args(tp)):
            _bind(own, param, resolve(arg, bindings))

    for klass in cls.__mro__:
        for base in klass.__dict__.get("__orig_bases__", ()):
            base_origin = get_origin(base)
            if base_origin is None or base_origin in _SKIPPED_BASES:
                continue
            scope = {**bindings, **own}
            params = getattr(base_origin, "__parameters__", ())
            for param, arg in zip(params, get_args(base)):
                _bind(own, param, resolve(arg, scope))

    bindings.update(own)
    return bindings


def _bind(bindings: TypeBindings, param: Any, value: Any) -> None:
    if not isinstance(param, TypeVar) or isinstance(value, TypeVar):
        return
    bindings.setdefault(param.__name__, value)


def resolve(tp: Any, bindings: Mapping[str, Any]) -> Any:
    """Substitute bound type variables in ``tp``; unbound ones are kept as-is."""
    if isinstance(tp, TypeVar):
        return bindings.get(tp.__name__, tp)

    params = getattr(tp, "__parameters__", None)
    if not params or get_origin(tp) is None:
        return tp

    substitutes = tuple(
        bindings.get(p.__name__, p) if isinstance(p, TypeVar) else p for p in params
    )
    if substitutes == tuple(params):
        return tp
    try:
        return tp[substitutes if len(substitutes) > 1 else substitutes[0]]
    except TypeError as err:
        raise UnsupportedTypeError(f"Cannot substitute {substitutes!r} into {tp!r}") from err


def resolve_element(tp: Any, bindings: Mapping[str, Any], owner: Any = None) -> Any:
    """Resolve a collection/array element type; it must not stay a bare type variable."""
    resolved = resolve(tp, bindings)
    if isinstance(resolved, TypeVar):
        raise UnresolvedTypeVariableError(resolved.__name__, owner)
    return resolved
