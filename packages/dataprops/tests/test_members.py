import logging
from dataclasses import InitVar, dataclass, field
from functools import cached_property
from typing import Any, ClassVar

import pytest
from pydantic import BaseModel

from dataprops.conf import DEFAULTS
from dataprops.exceptions import IntrospectionError
from dataprops.introspection import PropertyEnumerator, property_name


@pytest.fixture()
def enumerate_props():
    return PropertyEnumerator(ignored_bases=DEFAULTS["IGNORED_BASES"])


def _by_name(descriptors):
    return {d.name: d for d in descriptors}


@pytest.mark.parametrize(
    "member, expected",
    [
        ("get_total", "total"),
        ("getTotal", "total"),
        ("getURL", "uRL"),
        ("is_active", "active"),
        ("isActive", "active"),
        ("get", None),
        ("get_", None),
        ("get__private", None),
        ("getaway", None),
        ("island", None),
        ("total", None),
    ],
)
def test_property_name(member, expected):
    assert property_name(member) == expected


class Account:
    owner: str
    balance: float
    _secret: str
    kind: ClassVar[str] = "account"

    def get_currency(self) -> str:
        return "EUR"

    def isFrozen(self) -> bool:
        return False

    def get_rate(self, day) -> float:
        return 0.0

    def get_notes(self):
        return None

    def close(self) -> None:
        pass

    @staticmethod
    def get_bank() -> str:
        return "bank"

    @property
    def label(self) -> str:
        return self.owner

    @cached_property
    def score(self) -> int:
        return 1


def test_enumerates_fields_properties_and_accessors(enumerate_props):
    props = _by_name(enumerate_props(Account))

    assert set(props) == {"owner", "balance", "currency", "frozen", "notes", "label", "score"}
    assert props["owner"].kind == "field"
    assert props["label"].kind == "property"
    assert props["currency"].kind == "accessor"
    assert props["currency"].annotation is str
    assert props["notes"].annotation is Any


@dataclass
class Shipment:
    reference: str
    weight: float = 0.0
    tags: list[str] = field(default_factory=list)
    scale: InitVar[int] = 1


def test_dataclass_fields_skip_init_vars(enumerate_props):
    assert set(_by_name(enumerate_props(Shipment))) == {"reference", "weight", "tags"}


class Customer(BaseModel):
    name: str
    email: str | None = None

    def get_display(self) -> str:
        return self.name


def test_pydantic_model_members_exclude_framework_members(enumerate_props):
    assert set(_by_name(enumerate_props(Customer))) == {"name", "email", "display"}


class Base:
    code: str

    @property
    def title(self) -> str:
        return self.code


class Derived(Base):
    code: int


def test_subclass_declaration_wins(enumerate_props):
    props = _by_name(enumerate_props(Derived))

    assert props["code"].annotation is int
    assert props["code"].owner is Derived
    assert props["title"].owner is Base


class Renamed(Base):
    code = "fixed"


@dataclass
class Parcel:
    reference: str
    weight: float


@dataclass
class DefaultParcel(Parcel):
    weight = 1.0


def test_plain_default_does_not_hide_inherited_field(enumerate_props):
    props = _by_name(enumerate_props(Renamed))
    assert props["code"].annotation is str
    assert props["code"].owner is Base

    assert set(_by_name(enumerate_props(DefaultParcel))) == {"reference", "weight"}


class Meter:
    def get_reading(self, unit: str) -> float:
        return 0.0


def test_accessor_with_arguments_is_skipped(enumerate_props, caplog):
    with caplog.at_level(logging.DEBUG, logger="dataprops.introspection.members"):
        assert list(enumerate_props(Meter)) == []

    assert "Meter.get_reading" in caplog.text


class Broken:
    item: "MissingType"  # noqa: F821


def test_unresolvable_annotations_raise(enumerate_props):
    with pytest.raises(IntrospectionError):
        list(enumerate_props(Broken))


def test_custom_prefixes():
    class Sensor:
        def read_value(self) -> float:
            return 0.0

        def get_value(self) -> float:
            return 0.0

    enumerate_props = PropertyEnumerator(ignored_bases=("builtins.object",), prefixes=("read",))

    assert [d.name for d in enumerate_props(Sensor)] == ["value"]
