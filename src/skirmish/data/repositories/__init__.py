"""Repository exports."""

from .archetypes_repo import ArchetypesRepository

__all__ = [
    "ArchetypesRepository",
]
