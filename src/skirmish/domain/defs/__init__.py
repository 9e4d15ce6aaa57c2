"""Definition dataclasses loaded from JSON."""

from .archetype_def import ArchetypeDef

__all__ = ["ArchetypeDef"]
