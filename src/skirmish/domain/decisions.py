"""Decision strategy contract consumed by the battle controller."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from skirmish.core.types import ActionKind
from skirmish.domain.roster import CombatantView
from skirmish.domain.round_state import RoundState


@dataclass(frozen=True, slots=True)
class Decision:
    """Structured choice made for one combatant's turn.

    ``amount`` only applies to heals; ``None`` means the controller's
    default heal amount.
    """

    kind: ActionKind
    source_id: str
    target_id: str
    amount: int | None = None

    @classmethod
    def attack(cls, source_id: str, target_id: str) -> Decision:
        return cls(kind="attack", source_id=source_id, target_id=target_id)

    @classmethod
    def heal(cls, source_id: str, target_id: str, amount: int | None = None) -> Decision:
        return cls(kind="heal", source_id=source_id, target_id=target_id, amount=amount)


class DecisionStrategy(Protocol):
    """
    Chooses an action for a combatant.

    - RuleBasedStrategy: fixed thresholds
    - ConsoleStrategy: asks the user
    - OracleStrategy: asks an external model, falls back to rules
    """

    def decide(
        self,
        actor: CombatantView,
        allies: Sequence[CombatantView],
        enemies: Sequence[CombatantView],
        state: RoundState,
    ) -> Optional[Decision]: ...
