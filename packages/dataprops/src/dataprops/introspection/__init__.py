"""Runtime type introspection: shapes, terminators, generics and members."""

from .generics import TypeBindings, bindings_for, resolve, resolve_element
from .members import MemberSource, PropertyDescriptor, PropertyEnumerator, property_name
from .shapes import ShapeClassifier, TypeInfo, TypeShape, is_simple_type
from .terminators import BUILTIN_TERMINATOR_NAMES, BUILTIN_TERMINATORS, TerminatorRegistry
from .typeutils import qualified_name, unwrap

__all__ = [
    "BUILTIN_TERMINATORS",
    "BUILTIN_TERMINATOR_NAMES",
    "MemberSource",
    "PropertyDescriptor",
    "PropertyEnumerator",
    "ShapeClassifier",
    "TerminatorRegistry",
    "TypeBindings",
    "TypeInfo",
    "TypeShape",
    "bindings_for",
    "is_simple_type",
    "property_name",
    "qualified_name",
    "resolve",
    "resolve_element",
    "unwrap",
]
