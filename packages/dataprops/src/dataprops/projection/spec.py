# dataprops/projection/spec.py
"""Field selection specifications applied on top of full property-path lists."""
from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = ["FieldSpec", "matches", "project", "split_patterns"]

#: Context keys that override a spec per request.
CONTEXT_INCLUDE_KEY = "fields"
CONTEXT_EXCLUDE_KEY = "exclude_fields"


def split_patterns(value: Any) -> tuple[str, ...]:
    """Normalize ``"a, b.c"`` or ``["a", "b.c"]`` into ``("a", "b.c")``."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    return tuple(p for p in (str(v).strip() for v in value) if p)


class FieldSpec(BaseModel):
    """
    Include/exclude patterns selecting output fields.

    Patterns are dotted paths with ``fnmatch`` wildcards. A pattern without
    wildcards also selects its whole subtree: ``address`` selects
    ``address.city``. An empty ``include`` selects everything.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def normalize_patterns(cls, value: Any) -> tuple[str, ...]:
        return split_patterns(value)

    def resolve(self, context: Mapping[str, Any] | None = None) -> FieldSpec:
        """Apply per-request overrides found in ``context``; returns ``self`` when there are none."""
        if not context:
            return self
        update: dict[str, tuple[str, ...]] = {}
        if context.get(CONTEXT_INCLUDE_KEY):
            update["include"] = split_patterns(context[CONTEXT_INCLUDE_KEY])
        if context.get(CONTEXT_EXCLUDE_KEY):
            update["exclude"] = split_patterns(context[CONTEXT_EXCLUDE_KEY])
        if not update:
            return self
        return self.model_copy(update=update)


def matches(path: str, pattern: str) -> bool:
    return path == pattern or path.startswith(pattern + ".") or fnmatchcase(path, pattern)


def project(paths: Iterable[str], spec: FieldSpec) -> tuple[str, ...]:
    selected = [p for p in paths if not spec.include or any(matches(p, i) for i in spec.include)]
    return tuple(p for p in selected if not any(matches(p, e) for e in spec.exclude))
