"""Deterministic if-then decision strategy."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from skirmish.domain.decisions import Decision
from skirmish.domain.roster import CombatantView
from skirmish.domain.round_state import RoundState


@dataclass(frozen=True)
class RuleBasedStrategy:
    """
    Rules, first match wins:

    1. Own HP below ``self_heal_threshold``: heal self.
    2. A living ally below ``ally_heal_threshold``: heal the weakest one.
    3. Otherwise attack the living enemy with the lowest HP.
    """

    self_heal_threshold: float = 0.30
    ally_heal_threshold: float = 0.20
    heal_amount: int = 30

    def decide(
        self,
        actor: CombatantView,
        allies: Sequence[CombatantView],
        enemies: Sequence[CombatantView],
        state: RoundState,
    ) -> Optional[Decision]:
        del state
        if actor.hp_ratio < self.self_heal_threshold:
            return Decision.heal(actor.combatant_id, actor.combatant_id, self.heal_amount)

        wounded = [
            ally
            for ally in allies
            if ally.combatant_id != actor.combatant_id
            and ally.is_alive
            and ally.hp_ratio < self.ally_heal_threshold
        ]
        if wounded:
            weakest_ally = min(wounded, key=lambda ally: ally.hp)
            return Decision.heal(actor.combatant_id, weakest_ally.combatant_id, self.heal_amount)

        target = weakest_living(enemies)
        if target is None:
            return None
        return Decision.attack(actor.combatant_id, target.combatant_id)


def weakest_living(combatants: Sequence[CombatantView]) -> CombatantView | None:
    """Return the living combatant with the lowest HP, earliest in order on ties."""
    living = [combatant for combatant in combatants if combatant.is_alive]
    if not living:
        return None
    return min(living, key=lambda combatant: combatant.hp)
