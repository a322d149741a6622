# dataprops/introspection/typeutils.py
"""Small helpers over ``typing`` introspection shared by the resolvers."""
from __future__ import annotations

import types
from typing import Annotated, Any, Final, TypeVar, Union, get_args, get_origin

__all__ = [
    "NoneType",
    "is_union",
    "origin_class",
    "qualified_name",
    "unwrap",
]

NoneType = type(None)

_UNION_ORIGINS = (Union, types.UnionType)


def qualified_name(tp: Any) -> str:
    """Return the fully-qualified name of a class or parametrized alias.

    Classes render as ``module.qualname``; aliases append their arguments,
    e.g. ``builtins.list[shop.Item]``. Anything else falls back to ``repr``.
    """
    if tp is Any:
        return "typing.Any"
    if isinstance(tp, TypeVar):
        return f"~{tp.__name__}"
    origin = get_origin(tp)
    if origin is not None:
        head = qualified_name(origin) if isinstance(origin, type) else repr(origin)
        args = get_args(tp)
        if not args:
            return head
        return f"{head}[{', '.join(_arg_name(a) for a in args)}]"
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def _arg_name(arg: Any) -> str:
    if arg is Ellipsis:
        return "..."
    if isinstance(arg, (list, tuple)):
        return f"[{', '.join(_arg_name(a) for a in arg)}]"
    return qualified_name(arg)


def unwrap(tp: Any) -> Any:
    """Strip ``Annotated``, ``Final`` and ``NewType`` wrappers."""
    while True:
        if tp is Final:
            return Any
        origin = get_origin(tp)
        if origin is Annotated or origin is Final:
            tp = get_args(tp)[0]
            continue
        supertype = getattr(tp, "__supertype__", None)
        if supertype is not None:
            tp = supertype
            continue
        return tp


def is_union(tp: Any) -> bool:
    return get_origin(tp) in _UNION_ORIGINS


def origin_class(tp: Any) -> Any:
    """Return the class behind ``tp``: the alias origin, or ``tp`` itself."""
    origin = get_origin(tp)
    return origin if origin is not None else tp
