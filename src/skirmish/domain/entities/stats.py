"""Combat stat block shared by every combatant."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Stats:
    """Mutable health/mana pools plus fixed attack and defense ratings."""

    max_hp: int
    hp: int
    max_mp: int
    mp: int
    attack: int
    defense: int

    def __post_init__(self) -> None:
        if self.max_hp < 1:
            raise ValueError("max_hp must be at least 1.")
        if not 0 <= self.hp <= self.max_hp:
            raise ValueError(f"hp must be within [0, {self.max_hp}], got {self.hp}.")
        if not 0 <= self.mp <= self.max_mp:
            raise ValueError(f"mp must be within [0, {self.max_mp}], got {self.mp}.")
        if self.attack < 0 or self.defense < 0:
            raise ValueError("attack and defense cannot be negative.")

    @classmethod
    def full(cls, *, max_hp: int, max_mp: int, attack: int, defense: int) -> "Stats":
        """Stat block with both pools filled."""
        return cls(max_hp=max_hp, hp=max_hp, max_mp=max_mp, mp=max_mp, attack=attack, defense=defense)
