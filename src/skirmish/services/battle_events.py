"""Events and reports produced by the battle controller for display."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from skirmish.core.types import ActionKind, GameOverReason, TeamNumber


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Read-only snapshot of one executed action."""

    kind: ActionKind
    actor_id: str
    actor_name: str
    target_id: str
    target_name: str
    amount: int
    requested_amount: int
    target_hp_after: int
    defeated: bool


@dataclass(frozen=True, slots=True)
class CombatantSummary:
    name: str
    archetype: str
    team: TeamNumber
    final_hp: int
    alive: bool


@dataclass(frozen=True, slots=True)
class GameOverReport:
    """Final outcome; ``winning_team`` is ``None`` for a draw."""

    winning_team: TeamNumber | None
    reason: GameOverReason
    combatants: Tuple[CombatantSummary, ...]
    total_turns: int
    total_commands_executed: int
    rounds_played: int


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class RoundStartedEvent(BattleEvent):
    round_number: int


@dataclass(slots=True)
class TurnStartedEvent(BattleEvent):
    combatant_id: str
    combatant_name: str
    team: TeamNumber
    turn_number: int


@dataclass(slots=True)
class ActionResolvedEvent(BattleEvent):
    result: ActionResult
    description: str


@dataclass(slots=True)
class TurnSkippedEvent(BattleEvent):
    combatant_id: str
    combatant_name: str
    reason: str


@dataclass(slots=True)
class CombatantDefeatedEvent(BattleEvent):
    combatant_id: str
    combatant_name: str


@dataclass(slots=True)
class ActionUndoneEvent(BattleEvent):
    description: str
    history_size: int


@dataclass(slots=True)
class BattleResolvedEvent(BattleEvent):
    winning_team: TeamNumber | None
    reason: GameOverReason
