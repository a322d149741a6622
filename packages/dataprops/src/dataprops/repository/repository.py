# dataprops/repository/repository.py
"""Per-app cache of the complete property-path list of data classes."""
from __future__ import annotations

import logging
from threading import RLock
from typing import TYPE_CHECKING, Any, Mapping

from asgiref.sync import sync_to_async

from ..conf.models import RepositorySettings
from ..exceptions import ServiceDestroyedError
from ..introspection.members import MemberSource, PropertyEnumerator
from ..introspection.shapes import ShapeClassifier
from ..introspection.terminators import TerminatorRegistry
from ..introspection.typeutils import qualified_name, unwrap
from ..projection.cache import OutputFieldsCache
from ..services.base import AppServiceBase
from .builder import CycleGuard, PathBuilder

if TYPE_CHECKING:
    from ..app import DataPropsApp
    from ..projection.spec import FieldSpec

logger = logging.getLogger(__name__)

__all__ = ["DataPropertyRepository"]


class DataPropertyRepository(AppServiceBase):
    """Keeps the property paths of data classes, keyed by qualified type name.

    Every lookup, including the computation on a miss, runs under one
    repository-wide lock: at most one computation is ever in flight and no
    type is computed twice. Cached lists are immutable until :meth:`clear`.

    The terminator registry may be extended after construction; it is frozen
    by the first lookup.
    """

    def __init__(
        self,
        app: DataPropsApp | None = None,
        *,
        member_source: MemberSource | None = None,
        register: bool = True,
    ) -> None:
        self._lock = RLock()
        self._repo: dict[str, tuple[str, ...]] = {}
        self._member_source = member_source
        self.terminators = TerminatorRegistry()
        self.classifier = ShapeClassifier(self.terminators)
        self.builder: PathBuilder | None = None
        self.output_fields_cache = OutputFieldsCache(self)
        super().__init__(app, register=register)

    # --- lifecycle ---

    def initialize(self) -> None:
        settings = self.conf.typed(RepositorySettings)
        self.terminators.load_defaults(settings.TERMINATOR_NAMES)
        member_source = self._member_source or PropertyEnumerator(
            ignored_bases=settings.IGNORED_BASES,
            prefixes=settings.ACCESSOR_PREFIXES,
        )
        self.builder = PathBuilder(self.classifier, member_source)

    def release_resources(self) -> None:
        self.clear()

    # --- lookup ---

    def property_list_of(self, tp: Any) -> tuple[str, ...]:
        """
        Return the complete, sorted property-path list of a type.

        :param tp: A class or parametrized alias (``Page[User]``).
        :return: Dot-joined leaf paths, e.g. ``("address.city", "name")``.
        :raises UnresolvedTypeVariableError: If a collection element type
            variable has no binding.
        :raises IntrospectionError: If a type in the graph cannot be read.
        :raises ServiceDestroyedError: If the repository was destroyed.
        """
        tp = unwrap(tp)
        key = qualified_name(tp)
        with self._lock:
            if self.is_destroyed:
                raise ServiceDestroyedError(f"Property repository of app {self.app.name!r} was destroyed")
            paths = self._repo.get(key)
            if paths is not None:
                logger.debug("Property list cache hit: %s", key)
                return paths
            self.terminators.freeze()
            paths = tuple(self._property_list_of(tp, CycleGuard(), None))
            self._repo[key] = paths
            logger.debug("Computed %d property paths for %s", len(paths), key)
            return paths

    async def aproperty_list_of(self, tp: Any) -> tuple[str, ...]:
        """Async wrapper around :meth:`property_list_of`."""
        return await sync_to_async(self.property_list_of)(tp)

    def _property_list_of(
        self, tp: Any, guard: CycleGuard, bindings: Mapping[str, Any] | None
    ) -> list[str]:
        return self.builder.build(tp, guard, bindings)

    def output_fields(
        self,
        spec: FieldSpec,
        component_type: Any,
        context: Mapping[str, Any] | None = None,
    ) -> tuple[str, ...]:
        """Return the subset of ``component_type``'s paths selected by ``spec``."""
        return self.output_fields_cache.get_output_fields(spec, component_type, context)

    # --- introspection ---

    def cached_types(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._repo))

    def __contains__(self, tp: Any) -> bool:
        with self._lock:
            return qualified_name(unwrap(tp)) in self._repo

    # --- mutation / control ---

    def clear(self) -> None:
        """Empty the path cache, the shape cache and the terminator registry.

        Teardown only: built-in terminators stay unregistered until
        :meth:`initialize` runs again, so later lookups no longer treat
        ``Any`` and ``object`` as leaves.
        """
        with self._lock:
            self._repo.clear()
            self.classifier.clear()
            self.terminators.clear()
            self.output_fields_cache.clear()
