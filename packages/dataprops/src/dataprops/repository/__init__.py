"""Property-path discovery and the per-app path repository."""

from .builder import CycleGuard, PathBuilder
from .repository import DataPropertyRepository

__all__ = ["CycleGuard", "DataPropertyRepository", "PathBuilder"]
