# dataprops/utils/proxy.py
"""Late-binding proxy for context-dependent objects.

``current_app`` must follow :func:`~dataprops.push_current_app` scopes, so it
cannot be bound at import time. A :class:`Proxy` calls its resolver on every
access and forwards to whatever that returns.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

__all__ = ["Proxy", "maybe_evaluate"]


class Proxy(Generic[T]):
    """Forwards attribute access, membership tests and calls to ``resolver()``."""

    __slots__ = ("_resolver", "_label")

    def __init__(self, resolver: Callable[[], T], label: str | None = None) -> None:
        object.__setattr__(self, "_resolver", resolver)
        object.__setattr__(self, "_label", label or getattr(resolver, "__name__", "proxy"))

    def _resolve(self) -> T:
        return self._resolver()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._resolve(), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._resolve(), name, value)

    def __contains__(self, item: Any) -> bool:
        return item in self._resolve()

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._resolve()(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<Proxy {self._label}: {self._resolve()!r}>"


def maybe_evaluate(value: T | Proxy[T]) -> T:
    """Return the object behind ``value`` if it is a :class:`Proxy`."""
    if isinstance(value, Proxy):
        return value._resolve()
    return value
