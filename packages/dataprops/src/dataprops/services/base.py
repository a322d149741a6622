# dataprops/services/base.py
"""Base class for services whose lifetime is owned by an app."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .._state import get_current_app

if TYPE_CHECKING:
    from ..app import DataPropsApp
    from ..conf.settings import Settings

logger = logging.getLogger(__name__)


class AppServiceBase:
    """
    A service bound to a :class:`~dataprops.app.DataPropsApp`.

    ``initialize`` runs once at construction; ``release_resources`` runs once
    when the service is destroyed, normally from ``DataPropsApp.shutdown``.
    When no app is given the current app is used.
    """

    def __init__(self, app: DataPropsApp | None = None, *, register: bool = True) -> None:
        self._app = app if app is not None else get_current_app()
        self._destroyed = False
        self.initialize()
        if register:
            self._app.register_service(self)

    @property
    def app(self) -> DataPropsApp:
        return self._app

    @property
    def conf(self) -> Settings:
        return self._app.conf

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def initialize(self) -> None:
        """Hook: populate resources. Called once from ``__init__``."""

    def release_resources(self) -> None:
        """Hook: release resources. Called once from :meth:`destroy`."""

    def destroy(self) -> None:
        if self._destroyed:
            return
        try:
            self.release_resources()
        finally:
            self._destroyed = True
        logger.debug("Service destroyed: %s", type(self).__name__)
