"""Combatant model and the attack/defense formulas it delegates to."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

from skirmish.domain.entities import Stats

AttackStyle = Literal["melee", "magic", "ranged", "precision"]
DefenseStyle = Literal["standard", "heavy_armor"]

ATTACK_MULTIPLIERS: Dict[str, float] = {
    "melee": 1.2,
    "magic": 1.5,
    "ranged": 1.0,
    "precision": 1.1,
}

DEFENSE_STYLES = ("standard", "heavy_armor")


def reduce_damage(raw_damage: int, defense: int, style: str) -> int:
    """Return the damage left after the defender's armour is applied."""
    if style == "heavy_armor":
        return max(0, raw_damage - defense)
    if style == "standard":
        return max(0, raw_damage - defense // 2)
    raise ValueError(f"Unknown defense style: {style}")


@dataclass(slots=True)
class Combatant:
    """Represents an individual participant in battle."""

    combatant_id: str
    name: str
    archetype: str
    stats: Stats
    attack_style: AttackStyle = "melee"
    defense_style: DefenseStyle = "standard"

    @property
    def is_alive(self) -> bool:
        return self.stats.hp > 0

    @property
    def health(self) -> int:
        return self.stats.hp

    def attack(self, target: Combatant) -> int:
        """Return the raw damage this combatant deals to ``target``.

        The result only depends on the attacker's stats; the target's
        armour is applied later by :meth:`take_damage`.
        """
        del target
        try:
            multiplier = ATTACK_MULTIPLIERS[self.attack_style]
        except KeyError as exc:
            raise ValueError(f"Unknown attack style: {self.attack_style}") from exc
        return int(self.stats.attack * multiplier)

    def take_damage(self, raw_damage: int) -> int:
        """Apply defense-reduced damage and return the health actually lost."""
        if raw_damage < 0:
            raise ValueError("Damage cannot be negative.")
        damage = reduce_damage(raw_damage, self.stats.defense, self.defense_style)
        before = self.stats.hp
        self.stats.hp = max(0, before - damage)
        return before - self.stats.hp

    def heal(self, amount: int) -> int:
        """Restore up to ``amount`` health, capped at max HP, and return the gain."""
        if amount < 0:
            raise ValueError("Heal amount cannot be negative.")
        before = self.stats.hp
        self.stats.hp = min(self.stats.max_hp, before + amount)
        return self.stats.hp - before

    def set_health(self, value: int) -> None:
        """Set health directly, bypassing defense and healing formulas."""
        if value < 0 or value > self.stats.max_hp:
            raise ValueError(
                f"Health {value} is outside 0..{self.stats.max_hp} for '{self.name}'."
            )
        self.stats.hp = value
