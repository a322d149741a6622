# dataprops/introspection/terminators.py
"""Registry of types that are emitted as opaque leaves instead of being decomposed."""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from fractions import Fraction
from threading import RLock
from typing import Any, Iterable
from uuid import UUID

from ..exceptions import RegistryFrozenError
from .typeutils import origin_class, qualified_name

logger = logging.getLogger(__name__)

__all__ = [
    "BUILTIN_TERMINATORS",
    "BUILTIN_TERMINATOR_NAMES",
    "TerminatorRegistry",
]

#: Well-known value types that are never decomposed. ``object`` and ``Any``
#: cover unannotated members, rendered through their ``str()``.
BUILTIN_TERMINATORS: tuple[Any, ...] = (
    Decimal,
    Fraction,
    date,
    datetime,
    time,
    timedelta,
    UUID,
    object,
    Any,
)

#: Types matched by qualified name, so optional libraries need not be installed.
BUILTIN_TERMINATOR_NAMES: tuple[str, ...] = (
    "zoneinfo.ZoneInfo",
    "pendulum.datetime.DateTime",
    "pendulum.date.Date",
    "pendulum.time.Time",
    "pendulum.duration.Duration",
    "arrow.arrow.Arrow",
    "bson.objectid.ObjectId",
    "pandas._libs.tslibs.timestamps.Timestamp",
)


class TerminatorRegistry:
    """Exact-type and qualified-name terminator sets.

    Both sets are append-only until :meth:`freeze` is called and read-only
    afterwards. :meth:`clear` empties them and re-opens the registry.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._types: set[Any] = set()
        self._names: set[str] = set()
        self._frozen = False

    # --- registration ---

    def register(self, tp: Any) -> None:
        """Register an exact type; its qualified name is registered too."""
        with self._lock:
            self._ensure_open()
            self._types.add(tp)
            self._names.add(qualified_name(tp))

    def register_name(self, name: str) -> None:
        """Register a qualified type name (``module.QualName``)."""
        name = str(name).strip()
        if not name:
            raise ValueError("terminator name must be a non-empty string")
        with self._lock:
            self._ensure_open()
            self._names.add(name)

    def load_defaults(self, extra_names: Iterable[str] = ()) -> None:
        """Populate the built-in terminators plus ``extra_names``."""
        for tp in BUILTIN_TERMINATORS:
            self.register(tp)
        for name in (*BUILTIN_TERMINATOR_NAMES, *extra_names):
            self.register_name(name)
        logger.debug(
            "Loaded %d terminator types and %d terminator names", len(self._types), len(self._names)
        )

    def _ensure_open(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Terminator registry is frozen")

    # --- lookup ---

    def is_terminator(self, tp: Any) -> bool:
        try:
            if tp in self._types:
                return True
        except TypeError:
            # unhashable type expressions can only match by name
            pass
        if qualified_name(tp) in self._names:
            return True
        cls = origin_class(tp)
        return cls is not tp and qualified_name(cls) in self._names

    def __contains__(self, tp: Any) -> bool:
        return self.is_terminator(tp)

    def types(self) -> frozenset[Any]:
        with self._lock:
            return frozenset(self._types)

    def names(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._names)

    # --- mutation / control ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    def clear(self) -> None:
        with self._lock:
            self._types.clear()
            self._names.clear()
            self._frozen = False
