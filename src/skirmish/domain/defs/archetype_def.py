"""Combatant archetype definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ArchetypeDef:
    """Defines the starting stats and combat styles for an archetype."""

    id: str
    name: str
    base_hp: int
    base_mp: int
    attack: int
    defense: int
    attack_style: str
    defense_style: str
