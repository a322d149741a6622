# dataprops/projection/cache.py
"""Cache of projected output fields per (spec, type)."""
from __future__ import annotations

import logging
from threading import RLock
from typing import TYPE_CHECKING, Any, Mapping

from ..introspection.typeutils import qualified_name, unwrap
from .spec import FieldSpec, project

if TYPE_CHECKING:
    from ..repository import DataPropertyRepository

logger = logging.getLogger(__name__)


class OutputFieldsCache:
    """Projects a repository's path lists through :class:`FieldSpec` objects.

    Results for static specs are cached; results driven by request context
    overrides are computed every time.
    """

    def __init__(self, repository: DataPropertyRepository) -> None:
        self._repository = repository
        self._lock = RLock()
        self._cache: dict[tuple[FieldSpec, str], tuple[str, ...]] = {}

    def get_output_fields(
        self,
        spec: FieldSpec,
        component_type: Any,
        context: Mapping[str, Any] | None = None,
    ) -> tuple[str, ...]:
        resolved = spec.resolve(context)
        if resolved is not spec:
            return project(self._repository.property_list_of(component_type), resolved)

        key = (spec, qualified_name(unwrap(component_type)))
        with self._lock:
            fields = self._cache.get(key)
        if fields is not None:
            return fields

        fields = project(self._repository.property_list_of(component_type), spec)
        with self._lock:
            self._cache.setdefault(key, fields)
        logger.debug("Projected %d output fields for %s", len(fields), key[1])
        return fields

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
