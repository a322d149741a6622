"""Output-field projection on top of property-path lists."""

from .cache import OutputFieldsCache
from .spec import FieldSpec, matches, project, split_patterns

__all__ = ["FieldSpec", "OutputFieldsCache", "matches", "project", "split_patterns"]
