# dataprops/_state.py
"""Current-application tracking.

The active app lives in a ``ContextVar`` so threads and tasks can scope their
own app with :func:`push_current_app`. When nothing is active, a process-wide
default app is built on first use.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from threading import Lock
from typing import TYPE_CHECKING, Iterator

from .utils.proxy import Proxy

if TYPE_CHECKING:
    from .app import DataPropsApp
    from .repository import DataPropertyRepository

_current_app: ContextVar[DataPropsApp | None] = ContextVar("dataprops_current_app", default=None)
_default_app: DataPropsApp | None = None
_default_lock = Lock()


def _get_default_app() -> DataPropsApp:
    global _default_app
    with _default_lock:
        if _default_app is None or _default_app.is_shut_down:
            from .app import DataPropsApp

            _default_app = DataPropsApp("default")
        return _default_app


def get_current_app() -> DataPropsApp:
    """Return the active app, falling back to the default app."""
    app = _current_app.get()
    return app if app is not None else _get_default_app()


def set_current_app(app: DataPropsApp | None) -> None:
    _current_app.set(app)


@contextmanager
def push_current_app(app: DataPropsApp) -> Iterator[DataPropsApp]:
    token = _current_app.set(app)
    try:
        yield app
    finally:
        _current_app.reset(token)


def current_repository() -> DataPropertyRepository:
    """Shortcut for ``get_current_app().property_repository``."""
    return get_current_app().property_repository


current_app: Proxy[DataPropsApp] = Proxy(get_current_app, "current_app")

__all__ = [
    "current_app",
    "current_repository",
    "get_current_app",
    "push_current_app",
    "set_current_app",
]
