import sys
import types
from dataclasses import dataclass

import pytest

from dataprops import (
    DataPropertyRepository,
    DataPropsApp,
    current_app,
    current_repository,
    get_current_app,
    push_current_app,
)
from dataprops.exceptions import ServiceDestroyedError
from dataprops.services import AppServiceBase
from dataprops.utils import Proxy, maybe_evaluate


@dataclass
class Sample:
    name: str
    size: int


class RecordingService(AppServiceBase):
    def initialize(self) -> None:
        self.events = ["initialize"]

    def release_resources(self) -> None:
        self.events.append("release")


def test_push_current_app_restores_previous():
    original = get_current_app()
    new_app = DataPropsApp("temp")
    with push_current_app(new_app) as active:
        assert active is new_app
        assert get_current_app() is new_app
        assert current_repository() is new_app.property_repository
    assert get_current_app() is original


def test_current_app_follows_pushed_app():
    scoped = DataPropsApp("scoped-proxy")
    with push_current_app(scoped):
        assert current_app.name == "scoped-proxy"
        assert maybe_evaluate(current_app) is scoped
        assert current_app.property_repository is scoped.property_repository
    assert maybe_evaluate(current_app) is get_current_app()
    scoped.shutdown()


def test_proxy_forwards_membership_and_calls():
    items = ["a", "b"]
    proxy = Proxy(lambda: items)

    assert "a" in proxy
    assert proxy.index("b") == 1
    assert maybe_evaluate(items) is items

    calls = Proxy(lambda: len)
    assert calls(items) == 2


def test_default_app_is_rebuilt_after_shutdown():
    default = get_current_app()
    default.shutdown()

    replacement = get_current_app()

    assert replacement is not default
    assert not replacement.is_shut_down


def test_property_repository_is_built_once(app):
    repo = app.property_repository

    assert isinstance(repo, DataPropertyRepository)
    assert app.property_repository is repo
    assert app.services == (repo,)


def test_service_initialized_once_and_released_once(app):
    svc = RecordingService(app)

    svc.destroy()
    svc.destroy()

    assert svc.events == ["initialize", "release"]
    assert svc.is_destroyed


def test_shutdown_destroys_services_in_reverse_order():
    order = []

    class Tracked(AppServiceBase):
        def __init__(self, app, label):
            self.label = label
            super().__init__(app)

        def release_resources(self) -> None:
            order.append(self.label)

    app = DataPropsApp("ordered")
    Tracked(app, "first")
    Tracked(app, "second")

    app.shutdown()
    app.shutdown()

    assert order == ["second", "first"]
    assert app.is_shut_down
    assert app.services == ()


def test_shutdown_clears_repository():
    with DataPropsApp("scoped") as app:
        repo = app.property_repository
        repo.property_list_of(Sample)
        assert repo.terminators.names()

    assert repo.is_destroyed
    assert repo.cached_types() == ()
    assert not repo.terminators.names()


def test_register_after_shutdown_raises():
    app = DataPropsApp("closed")
    app.shutdown()

    with pytest.raises(RuntimeError):
        RecordingService(app)


def test_app_reads_config_module_from_envvar(monkeypatch):
    module = types.ModuleType("dataprops_test_conf")
    module.TERMINATOR_NAMES = ("shop.models.Money",)
    monkeypatch.setitem(sys.modules, "dataprops_test_conf", module)
    monkeypatch.setenv("DATAPROPS_CONFIG_MODULE", "dataprops_test_conf")

    app = DataPropsApp("env")

    assert app.conf["TERMINATOR_NAMES"] == ("shop.models.Money",)
    assert "shop.models.Money" in app.property_repository.terminators.names()
    app.shutdown()


def test_destroyed_repository_refuses_lookups():
    app = DataPropsApp("torn-down")
    repo = app.property_repository
    assert repo.property_list_of(Sample) == ("name", "size")

    app.shutdown()

    with pytest.raises(ServiceDestroyedError):
        repo.property_list_of(Sample)
    assert repo.cached_types() == ()
