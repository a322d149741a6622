"""
dataprops: property-path discovery for data classes.

Computes, for any class, the complete sorted set of dot-joined property
paths reachable by walking its readable members (fields, properties and
accessor methods), through collections, variadic tuples and generic type
parameters. Output-projection code uses these lists to decide which leaf
fields of an object graph to emit.

Import Guidelines:
------------------
- Use `dataprops.DataPropsApp` to own configuration and services.
- Use `app.property_repository.property_list_of(cls)` to get a path list.
- Use `dataprops.projection.FieldSpec` to select output fields.
- Use `dataprops.exceptions` for standardized error handling.
"""

from .app import DataPropsApp
from ._state import current_app, current_repository, get_current_app, push_current_app
from .projection import FieldSpec
from .repository import DataPropertyRepository

__all__ = [
    "DataPropertyRepository",
    "DataPropsApp",
    "FieldSpec",
    "current_app",
    "current_repository",
    "get_current_app",
    "push_current_app",
]
