# dataprops/app.py
"""The application object owning dataprops services.

Lifecycle:

1. construction  -> settings loaded from ``DATAPROPS_CONFIG_MODULE`` (if set)
2. ``configure`` -> apply settings from mappings/objects
3. first access  -> services (e.g. the property repository) built lazily and
                    initialized once
4. ``shutdown``  -> services destroyed in reverse registration order
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import TYPE_CHECKING, Any, TypeVar

from ._state import push_current_app, set_current_app
from .conf.settings import Settings

if TYPE_CHECKING:
    from .repository import DataPropertyRepository
    from .services.base import AppServiceBase

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="AppServiceBase")


@dataclass
class DataPropsApp:
    name: str = "dataprops"
    conf: Settings = field(default_factory=Settings)

    _services: list[AppServiceBase] = field(default_factory=list, repr=False)
    _lock: RLock = field(default_factory=RLock, init=False, repr=False)
    _shut_down: bool = False

    def __post_init__(self) -> None:
        self.conf.update_from_envvar()

    # ------------------------------------------------------------------
    # Current app helpers
    # ------------------------------------------------------------------
    def set_as_current(self) -> DataPropsApp:
        set_current_app(self)
        return self

    def as_current(self):
        return push_current_app(self)

    # ------------------------------------------------------------------
    # Configuration helpers
    # ------------------------------------------------------------------
    def configure(self, mapping: dict | None = None, *, namespace: str | None = None) -> DataPropsApp:
        if mapping:
            self.conf.update_from_mapping(mapping, namespace=namespace)
        return self

    def config_from_object(self, obj: str, *, namespace: str | None = None) -> DataPropsApp:
        self.conf.update_from_object(obj, namespace=namespace)
        return self

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------
    def register_service(self, service: AppServiceBase) -> AppServiceBase:
        with self._lock:
            if self._shut_down:
                raise RuntimeError(f"App {self.name!r} has been shut down")
            if service not in self._services:
                self._services.append(service)
        return service

    def service(self, service_cls: type[S]) -> S | None:
        with self._lock:
            for svc in self._services:
                if isinstance(svc, service_cls):
                    return svc
        return None

    @property
    def services(self) -> tuple[AppServiceBase, ...]:
        with self._lock:
            return tuple(self._services)

    @property
    def property_repository(self) -> DataPropertyRepository:
        """Return this app's repository, building it on first access."""
        from .repository import DataPropertyRepository

        with self._lock:
            repo = self.service(DataPropertyRepository)
            if repo is None:
                repo = DataPropertyRepository(self)
            return repo

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def is_shut_down(self) -> bool:
        return self._shut_down

    def shutdown(self) -> None:
        with self._lock:
            if self._shut_down:
                return
            services = list(reversed(self._services))
            self._services.clear()
            self._shut_down = True

        for svc in services:
            svc.destroy()
        logger.debug("App %r shut down (%d services released)", self.name, len(services))

    def __enter__(self) -> DataPropsApp:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.shutdown()


__all__ = ["DataPropsApp"]
