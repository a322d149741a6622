# dataprops/conf/models.py
"""Typed views over :class:`~dataprops.conf.settings.Settings`."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .defaults import DEFAULTS


def _as_names(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    return tuple(n for n in (str(v).strip() for v in value) if n)


class RepositorySettings(BaseModel):
    """Settings consumed by :class:`~dataprops.repository.DataPropertyRepository`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    TERMINATOR_NAMES: tuple[str, ...] = ()
    IGNORED_BASES: tuple[str, ...] = Field(default=DEFAULTS["IGNORED_BASES"])
    ACCESSOR_PREFIXES: tuple[str, ...] = Field(default=DEFAULTS["ACCESSOR_PREFIXES"], min_length=1)

    @field_validator("TERMINATOR_NAMES", "IGNORED_BASES", "ACCESSOR_PREFIXES", mode="before")
    @classmethod
    def split_names(cls, value: Any) -> tuple[str, ...]:
        return _as_names(value)
