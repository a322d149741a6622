# dataprops/exceptions/introspection_exceptions.py
"""Type introspection exceptions"""
from dataprops.exceptions.base import DataPropsError


# ----------------------------------------------------------------------------
# Introspection errors
# ----------------------------------------------------------------------------
class IntrospectionError(DataPropsError):
    """Raised when a type's shape cannot be read (e.g. annotations fail to evaluate)."""


class UnresolvedTypeVariableError(IntrospectionError):
    """Raised when a collection or array element is a type variable with no binding."""

    def __init__(self, name: str, owner: object = None) -> None:
        self.name = name
        self.owner = owner
        where = f" in {owner!r}" if owner is not None else ""
        super().__init__(f"Type variable {name!r} is not bound{where}")


class UnsupportedTypeError(IntrospectionError):
    """Raised for type expressions that are neither classes, aliases nor type variables."""
