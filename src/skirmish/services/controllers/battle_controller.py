"""UI-agnostic turn scheduler that drives a two-team battle."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Sequence, Tuple

from skirmish.core.types import BattlePhase, GameOverReason, TeamNumber
from skirmish.domain.actions import Action, AttackAction, HealAction
from skirmish.domain.decisions import Decision, DecisionStrategy
from skirmish.domain.errors import ConfigurationError
from skirmish.domain.history import ActionHistory
from skirmish.domain.roster import CombatantView, Roster
from skirmish.domain.round_state import RoundState
from skirmish.services.battle_events import (
    ActionResolvedEvent,
    ActionResult,
    ActionUndoneEvent,
    BattleEvent,
    BattleResolvedEvent,
    CombatantDefeatedEvent,
    CombatantSummary,
    GameOverReport,
    RoundStartedEvent,
    TurnSkippedEvent,
    TurnStartedEvent,
)

logger = logging.getLogger(__name__)

DEFAULT_HEAL_AMOUNT = 30

EventSink = Callable[[BattleEvent], None]


class BattleController:
    """
    Turn scheduler for a battle between two ordered teams.

    The controller owns the action history and the round/turn state. It asks
    each living combatant's strategy for a decision, executes it through the
    history, and re-checks the win condition after every single action.

    Responsibilities:
    - Validate that every combatant has exactly one team and one strategy
    - Run turns in team order, skipping defeated combatants
    - Treat unusable decisions as turns with no effect
    - Return structured events for each step

    Non-responsibilities (handled by presentation layer):
    - Rendering events or the final report
    - Prompting for user input
    """

    def __init__(
        self,
        roster: Roster,
        team_one: Sequence[str],
        team_two: Sequence[str],
        strategies: Mapping[str, DecisionStrategy],
        *,
        default_heal_amount: int = DEFAULT_HEAL_AMOUNT,
        max_rounds: int | None = None,
    ) -> None:
        self._roster = roster
        self._teams: Dict[TeamNumber, Tuple[str, ...]] = {1: tuple(team_one), 2: tuple(team_two)}
        self._strategies: Dict[str, DecisionStrategy] = dict(strategies)
        self._default_heal_amount = default_heal_amount
        self._max_rounds = max_rounds
        self._validate_setup()

        self._history = ActionHistory(roster)
        self._state = RoundState.initial()
        self._phase: BattlePhase = "round_start"
        self._outcome: Tuple[TeamNumber | None, GameOverReason] | None = None
        self._rounds_started = 0

    # -----------------------
    # Structured state
    # -----------------------
    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def phase(self) -> BattlePhase:
        return self._phase

    @property
    def history(self) -> ActionHistory:
        return self._history

    @property
    def roster(self) -> Roster:
        return self._roster

    @property
    def is_over(self) -> bool:
        return self._outcome is not None

    @property
    def winning_team(self) -> TeamNumber | None:
        return self._outcome[0] if self._outcome else None

    def team(self, number: TeamNumber) -> Tuple[str, ...]:
        return self._teams[number]

    def team_of(self, combatant_id: str) -> TeamNumber:
        for number, members in self._teams.items():
            if combatant_id in members:
                return number
        raise ValueError(f"Combatant '{combatant_id}' is not on either team.")

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def play_game(self, on_event: EventSink | None = None) -> GameOverReport:
        """Run rounds until the battle resolves and return the final report."""
        while not self.is_over:
            for event in self.play_round():
                if on_event is not None:
                    on_event(event)
        return self.report()

    def play_round(self) -> List[BattleEvent]:
        """Run one full round: team one in order, then team two."""
        if self.is_over:
            return []
        resolved = self._update_victory()
        if resolved:
            return [resolved]

        self._phase = "round_start"
        self._rounds_started += 1
        events: List[BattleEvent] = [RoundStartedEvent(round_number=self._state.round_number)]
        logger.debug("Round %d started", self._state.round_number)

        for phase, number in (("team_one", 1), ("team_two", 2)):
            if self.is_over:
                break
            self._phase = phase
            for combatant_id in self._teams[number]:
                if self.is_over:
                    break
                events.extend(self.play_turn(combatant_id))

        if self.is_over:
            return events

        self._phase = "round_end"
        self._state = self._state.next_round()
        if self._max_rounds is not None and self._rounds_started >= self._max_rounds:
            events.append(self._resolve(None, "round_limit"))
        else:
            self._phase = "round_start"
        return events

    def play_turn(self, combatant_id: str) -> List[BattleEvent]:
        """Resolve a single combatant's turn and return the resulting events."""
        if self.is_over:
            return []
        number = self.team_of(combatant_id)
        actor = self._roster.get(combatant_id)
        if not actor.is_alive:
            logger.debug("Skipping defeated combatant %s", actor.name)
            return [TurnSkippedEvent(combatant_id=combatant_id, combatant_name=actor.name, reason="defeated")]

        events: List[BattleEvent] = [
            TurnStartedEvent(
                combatant_id=combatant_id,
                combatant_name=actor.name,
                team=number,
                turn_number=self._state.turn_number + 1,
            )
        ]
        allies = self._roster.views(self._teams[number])
        enemies = self._roster.views(self._teams[self._opponent(number)])
        decision = self._request_decision(combatant_id, allies, enemies)
        action, reason = self._build_action(combatant_id, decision, allies, enemies)

        if action is None:
            logger.warning("%s's turn has no effect: %s", actor.name, reason)
            events.append(TurnSkippedEvent(combatant_id=combatant_id, combatant_name=actor.name, reason=reason))
        else:
            self._history.execute(action)
            result = self._to_result(action)
            events.append(ActionResolvedEvent(result=result, description=action.describe(self._roster)))
            if isinstance(action, AttackAction) and action.actual_health_lost > 0 and result.defeated:
                events.append(CombatantDefeatedEvent(combatant_id=result.target_id, combatant_name=result.target_name))

        self._state = self._state.next_turn().with_history(len(self._history))
        resolved = self._update_victory()
        if resolved:
            events.append(resolved)
        return events

    def undo_last_action(self) -> List[BattleEvent]:
        """Undo the most recent action; a no-op when nothing is left to undo."""
        action = self._history.undo_last()
        if action is None:
            return []
        self._state = self._state.with_history(len(self._history))
        if self._outcome is not None and self._outcome[1] != "round_limit":
            if self._roster.any_alive(self._teams[1]) and self._roster.any_alive(self._teams[2]):
                logger.info("Undo reopened the battle")
                self._outcome = None
                self._phase = "round_start"
        return [ActionUndoneEvent(description=action.describe(self._roster), history_size=len(self._history))]

    def report(self) -> GameOverReport:
        """Return the final report for a resolved battle."""
        if self._outcome is None:
            raise ValueError("Battle is not over yet.")
        winning_team, reason = self._outcome
        summaries: List[CombatantSummary] = []
        for number, members in self._teams.items():
            for combatant_id in members:
                combatant = self._roster.get(combatant_id)
                summaries.append(
                    CombatantSummary(
                        name=combatant.name,
                        archetype=combatant.archetype,
                        team=number,
                        final_hp=max(0, combatant.stats.hp),
                        alive=combatant.is_alive,
                    )
                )
        return GameOverReport(
            winning_team=winning_team,
            reason=reason,
            combatants=tuple(summaries),
            total_turns=self._state.turn_number,
            total_commands_executed=self._state.command_history_size,
            rounds_played=self._rounds_started,
        )

    # -----------------------
    # Helpers
    # -----------------------
    def _validate_setup(self) -> None:
        if self._default_heal_amount < 0:
            raise ConfigurationError("Default heal amount cannot be negative.")
        if self._max_rounds is not None and self._max_rounds < 1:
            raise ConfigurationError("max_rounds must be at least 1.")

        seen: set[str] = set()
        for number, members in self._teams.items():
            if not members:
                raise ConfigurationError(f"Team {number} has no combatants.")
            for combatant_id in members:
                if combatant_id not in self._roster:
                    raise ConfigurationError(f"Team {number} references unknown combatant '{combatant_id}'.")
                if combatant_id in seen:
                    raise ConfigurationError(f"Combatant '{combatant_id}' is assigned more than once.")
                seen.add(combatant_id)
                if combatant_id not in self._strategies:
                    raise ConfigurationError(f"No decision strategy mapped for combatant '{combatant_id}'.")

        unknown = sorted(set(self._strategies) - seen)
        if unknown:
            raise ConfigurationError(f"Strategies mapped for combatants not in battle: {unknown}.")

    @staticmethod
    def _opponent(number: TeamNumber) -> TeamNumber:
        return 2 if number == 1 else 1

    def _request_decision(
        self, combatant_id: str, allies: List[CombatantView], enemies: List[CombatantView]
    ) -> Decision | None:
        strategy = self._strategies[combatant_id]
        actor = self._roster.view(combatant_id)
        try:
            return strategy.decide(actor, allies, enemies, self._state)
        except Exception:
            logger.warning("Decision strategy for %s failed", actor.name, exc_info=True)
            return None

    def _build_action(
        self,
        combatant_id: str,
        decision: object,
        allies: List[CombatantView],
        enemies: List[CombatantView],
    ) -> Tuple[Action | None, str]:
        if decision is None:
            return None, "no decision"
        if not isinstance(decision, Decision):
            return None, f"unrecognised decision {decision!r}"
        if not isinstance(decision.kind, str) or not isinstance(decision.target_id, str):
            return None, f"malformed decision {decision!r}"
        if decision.source_id != combatant_id:
            return None, f"decision made for '{decision.source_id}'"

        if decision.kind == "attack":
            if decision.target_id not in {view.combatant_id for view in enemies}:
                return None, f"attack target '{decision.target_id}' is not an enemy"
            return AttackAction(attacker_id=combatant_id, target_id=decision.target_id), ""

        if decision.kind == "heal":
            if decision.target_id not in {view.combatant_id for view in allies}:
                return None, f"heal target '{decision.target_id}' is not an ally"
            amount = self._default_heal_amount if decision.amount is None else decision.amount
            if not isinstance(amount, int) or isinstance(amount, bool):
                return None, f"heal amount {amount!r} is not an integer"
            if amount < 0:
                return None, f"heal amount {amount} is negative"
            return HealAction(healer_id=combatant_id, target_id=decision.target_id, amount=amount), ""

        return None, f"unknown action kind '{decision.kind}'"

    def _to_result(self, action: Action) -> ActionResult:
        actor = self._roster.get(action.actor_id)
        target = self._roster.get(action.target_id)
        if isinstance(action, AttackAction):
            amount = action.actual_health_lost
            requested = action.raw_damage
        else:
            amount = action.actual_healing_done
            requested = action.amount
        return ActionResult(
            kind=action.kind,
            actor_id=actor.combatant_id,
            actor_name=actor.name,
            target_id=target.combatant_id,
            target_name=target.name,
            amount=amount,
            requested_amount=requested,
            target_hp_after=max(0, target.stats.hp),
            defeated=not target.is_alive,
        )

    def _update_victory(self) -> BattleResolvedEvent | None:
        if self._outcome is not None:
            return None
        team_one_alive = self._roster.any_alive(self._teams[1])
        team_two_alive = self._roster.any_alive(self._teams[2])
        if team_one_alive and team_two_alive:
            return None
        if not team_one_alive and not team_two_alive:
            return self._resolve(None, "mutual_defeat")
        return self._resolve(1 if team_one_alive else 2, "team_defeated")

    def _resolve(self, winning_team: TeamNumber | None, reason: GameOverReason) -> BattleResolvedEvent:
        self._outcome = (winning_team, reason)
        self._phase = "game_over"
        if winning_team is None:
            logger.info("Battle ended in a draw (%s) after %d turns", reason, self._state.turn_number)
        else:
            logger.info("Team %d wins after %d turns", winning_team, self._state.turn_number)
        return BattleResolvedEvent(winning_team=winning_team, reason=reason)
