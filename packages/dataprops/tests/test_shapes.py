import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any, Literal, NewType, Optional, Sequence, TypeVar

import pytest
from pydantic import BaseModel

from dataprops.exceptions import UnsupportedTypeError
from dataprops.introspection import ShapeClassifier, TerminatorRegistry, TypeShape

T = TypeVar("T")
UserId = NewType("UserId", int)


class Color(enum.Enum):
    RED = "red"


class Point:
    x: int


@dataclass
class IterableRecord:
    value: int

    def __iter__(self):
        return iter((self.value,))


class Row(BaseModel):
    value: int


@pytest.fixture()
def classifier():
    registry = TerminatorRegistry()
    registry.load_defaults()
    return ShapeClassifier(registry)


@pytest.mark.parametrize(
    "tp, shape",
    [
        (type, TypeShape.META),
        (type[Point], TypeShape.META),
        (Optional[Point], TypeShape.UNION),
        (int | str, TypeShape.UNION),
        (tuple[Point, ...], TypeShape.ARRAY),
        (str, TypeShape.SIMPLE),
        (bytes, TypeShape.SIMPLE),
        (bool, TypeShape.SIMPLE),
        (float, TypeShape.SIMPLE),
        (Color, TypeShape.SIMPLE),
        (Literal["a", "b"], TypeShape.SIMPLE),
        (None, TypeShape.SIMPLE),
        (UserId, TypeShape.SIMPLE),
        (Annotated[int, "meta"], TypeShape.SIMPLE),
        (list[Point], TypeShape.ITERABLE),
        (list, TypeShape.ITERABLE),
        (Sequence[Point], TypeShape.ITERABLE),
        (Iterator[Point], TypeShape.ITERABLE),
        (set[int], TypeShape.ITERABLE),
        (tuple[int, str], TypeShape.ITERABLE),
        (datetime, TypeShape.TERMINATOR),
        (object, TypeShape.TERMINATOR),
        (Any, TypeShape.TERMINATOR),
        (Point, TypeShape.COMPOSITE),
        (IterableRecord, TypeShape.COMPOSITE),
        (Row, TypeShape.COMPOSITE),
    ],
)
def test_classify(classifier, tp, shape):
    assert classifier.classify(tp).shape is shape


def test_union_members_drop_none(classifier):
    assert classifier.classify(Optional[Point]).args == (Point,)


def test_mapping_contributes_value_type_only(classifier):
    info = classifier.classify(dict[str, Point])

    assert info.shape is TypeShape.ITERABLE
    assert info.args == (Point,)
    assert classifier.classify(Mapping[str, T]).args == (T,)


def test_fixed_tuple_contributes_all_members(classifier):
    assert classifier.classify(tuple[int, Point]).args == (int, Point)


def test_array_component(classifier):
    assert classifier.classify(tuple[Point, ...]).args == (Point,)


def test_classification_is_cached(classifier):
    first = classifier.classify(list[Point])

    assert classifier.classify(list[Point]) is first
    assert len(classifier) == 1

    classifier.clear()
    assert len(classifier) == 0


def test_terminator_registration_changes_shape():
    registry = TerminatorRegistry()
    registry.register(Point)

    assert ShapeClassifier(registry).classify(Point).shape is TypeShape.TERMINATOR


def test_unclassifiable_expression_raises(classifier):
    with pytest.raises(UnsupportedTypeError):
        classifier.classify("Point")
