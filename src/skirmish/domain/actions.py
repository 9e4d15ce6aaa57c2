"""Reversible battle actions.

Each action names the combatants it touches by id and resolves them through
the :class:`~skirmish.domain.roster.Roster` when it runs. Executing records
exactly how much health changed so that undo can restore the prior value
even when the change was clamped at 0 or at max HP.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from skirmish.core.types import ActionKind
from skirmish.domain.errors import ActionNotExecutedError
from skirmish.domain.roster import Roster


@dataclass(slots=True)
class AttackAction:
    """One combatant attacks another."""

    kind: ClassVar[ActionKind] = "attack"

    attacker_id: str
    target_id: str
    raw_damage: int = field(default=0, init=False)
    actual_health_lost: int = field(default=0, init=False)
    executed: bool = field(default=False, init=False)

    @property
    def actor_id(self) -> str:
        return self.attacker_id

    def execute(self, roster: Roster) -> None:
        attacker = roster.get(self.attacker_id)
        target = roster.get(self.target_id)
        health_before = target.stats.hp
        self.raw_damage = attacker.attack(target)
        target.take_damage(self.raw_damage)
        self.actual_health_lost = health_before - target.stats.hp
        self.executed = True

    def undo(self, roster: Roster) -> None:
        if not self.executed:
            raise ActionNotExecutedError(f"Cannot undo '{self.describe(roster)}' before it runs.")
        roster.get(self.target_id).heal(self.actual_health_lost)
        self.executed = False

    def describe(self, roster: Roster) -> str:
        attacker = roster.get(self.attacker_id)
        target = roster.get(self.target_id)
        return f"{attacker.name} attacks {target.name}"


@dataclass(slots=True)
class HealAction:
    """One combatant restores a fixed amount of health to another (or itself)."""

    kind: ClassVar[ActionKind] = "heal"

    healer_id: str
    target_id: str
    amount: int
    actual_healing_done: int = field(default=0, init=False)
    executed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Heal amount cannot be negative.")

    @property
    def actor_id(self) -> str:
        return self.healer_id

    def execute(self, roster: Roster) -> None:
        target = roster.get(self.target_id)
        health_before = target.stats.hp
        target.heal(self.amount)
        self.actual_healing_done = target.stats.hp - health_before
        self.executed = True

    def undo(self, roster: Roster) -> None:
        if not self.executed:
            raise ActionNotExecutedError(f"Cannot undo '{self.describe(roster)}' before it runs.")
        target = roster.get(self.target_id)
        # Direct set: going through take_damage would apply the target's armour.
        target.set_health(target.stats.hp - self.actual_healing_done)
        self.executed = False

    def describe(self, roster: Roster) -> str:
        target = roster.get(self.target_id)
        return f"Heal {target.name} for {self.amount} HP"


Action = Union[AttackAction, HealAction]

__all__ = ["Action", "AttackAction", "HealAction"]
