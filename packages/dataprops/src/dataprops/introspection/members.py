# dataprops/introspection/members.py
"""Enumeration of the readable properties of a class."""
from __future__ import annotations

import dataclasses
import inspect
import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable, ClassVar, Iterable, Iterator, Literal, get_origin, get_type_hints

from pydantic import BaseModel

from ..exceptions import IntrospectionError
from .typeutils import qualified_name

logger = logging.getLogger(__name__)

__all__ = [
    "MemberSource",
    "PropertyDescriptor",
    "PropertyEnumerator",
    "lower_first",
    "property_name",
]

PropertyKind = Literal["accessor", "property", "field"]


@dataclass(frozen=True, slots=True)
class PropertyDescriptor:
    """A named, zero-argument readable member of a class."""

    name: str
    annotation: Any
    kind: PropertyKind
    owner: type


MemberSource = Callable[[type], Iterable[PropertyDescriptor]]


def lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]


def property_name(member_name: str, prefixes: Iterable[str] = ("get", "is")) -> str | None:
    """Map an accessor name to its property name.

    ``get_total`` and ``getTotal`` map to ``total``; ``is_active`` and
    ``isActive`` map to ``active``. Names that merely start with a prefix
    (``island``, ``getaway``) are not accessors.
    """
    for prefix in prefixes:
        if not member_name.startswith(prefix):
            continue
        rest = member_name[len(prefix):]
        if rest.startswith("_"):
            rest = rest[1:]
            if rest and not rest.startswith("_"):
                return rest
        elif rest[:1].isupper():
            return lower_first(rest)
    return None


class PropertyEnumerator:
    """Lists the candidate properties of a class.

    Candidates are public annotated fields (dataclass fields, pydantic fields,
    plain class annotations), ``property``/``cached_property`` members, and
    plain methods that take only ``self`` and follow the accessor naming
    convention. Members declared on ``ignored_bases`` are never listed.
    """

    def __init__(
        self,
        *,
        ignored_bases: Iterable[str] = (),
        prefixes: Iterable[str] = ("get", "is"),
    ) -> None:
        self.ignored_bases = frozenset(ignored_bases)
        self.prefixes = tuple(prefixes)

    def __call__(self, cls: type) -> Iterator[PropertyDescriptor]:
        hints = _field_hints(cls)
        seen: set[str] = set()

        for klass in inspect.getmro(cls):
            if qualified_name(klass) in self.ignored_bases:
                continue

            for name in inspect.get_annotations(klass):
                if name.startswith("_") or name in seen:
                    continue
                seen.add(name)
                if name not in hints or _is_class_level(hints[name]):
                    continue
                yield PropertyDescriptor(name, hints[name], "field", klass)

            for attr, member in vars(klass).items():
                if attr.startswith("_") or attr in seen:
                    continue
                # a plain default (``name = "x"``) must not hide an inherited field
                descriptor = self._describe(klass, attr, member)
                if descriptor is not None:
                    seen.add(attr)
                    yield descriptor

    def _describe(self, klass: type, attr: str, member: Any) -> PropertyDescriptor | None:
        # pydantic keeps decorated members (e.g. computed fields) behind a proxy
        wrapped = getattr(member, "wrapped", None)
        if isinstance(wrapped, (property, cached_property)):
            member = wrapped
        if isinstance(member, property):
            if member.fget is None:
                return None
            return PropertyDescriptor(attr, _return_hint(member.fget), "property", klass)
        if isinstance(member, cached_property):
            return PropertyDescriptor(attr, _return_hint(member.func), "property", klass)
        if inspect.isfunction(member):
            name = property_name(attr, self.prefixes)
            if name is None:
                return None
            if not _takes_only_self(member):
                logger.debug("Skipping %s.%s: accessor takes arguments", klass.__qualname__, attr)
                return None
            return PropertyDescriptor(name, _return_hint(member), "accessor", klass)
        return None


def _field_hints(cls: type) -> dict[str, Any]:
    """Evaluated field annotations; pydantic models report their own fields."""
    if issubclass(cls, BaseModel):
        return {
            name: info.annotation if info.annotation is not None else Any
            for name, info in cls.model_fields.items()
        }
    return _type_hints(cls, include_extras=True)


def _type_hints(obj: Any, **kwargs: Any) -> dict[str, Any]:
    try:
        return get_type_hints(obj, **kwargs)
    except (NameError, TypeError, AttributeError, SyntaxError) as err:
        raise IntrospectionError(f"Cannot evaluate annotations of {obj!r}: {err}") from err


def _return_hint(func: Callable[..., Any]) -> Any:
    return _type_hints(func, include_extras=True).get("return", Any)


def _is_class_level(hint: Any) -> bool:
    if hint is ClassVar or get_origin(hint) is ClassVar:
        return True
    return isinstance(hint, dataclasses.InitVar) or hint is dataclasses.InitVar


def _takes_only_self(func: Callable[..., Any]) -> bool:
    try:
        params = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        return False
    if len(params) != 1:
        return False
    return params[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    )
