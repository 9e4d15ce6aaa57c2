"""Decision strategy that asks a person at the console."""
from __future__ import annotations

from typing import Callable, Optional, Sequence

from skirmish.domain.decisions import Decision
from skirmish.domain.roster import CombatantView
from skirmish.domain.round_state import RoundState

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class ConsoleStrategy:
    """Prompts for an action and a target, re-prompting on invalid input.

    End of input (EOF) yields no decision so the turn passes without effect.
    """

    def __init__(
        self,
        input_fn: InputFn = input,
        output_fn: OutputFn = print,
        *,
        heal_amount: int | None = None,
    ) -> None:
        self._input = input_fn
        self._output = output_fn
        self._heal_amount = heal_amount

    def decide(
        self,
        actor: CombatantView,
        allies: Sequence[CombatantView],
        enemies: Sequence[CombatantView],
        state: RoundState,
    ) -> Optional[Decision]:
        self._render_state(actor, allies, enemies, state)
        try:
            while True:
                self._output(f"\nYour turn, {actor.name}!")
                self._output("1. Attack an enemy")
                self._output("2. Heal an ally")
                choice = self._input("Choose action (1-2): ").strip()
                if choice == "1":
                    target = self._choose_target("attack", enemies)
                    if target is not None:
                        return Decision.attack(actor.combatant_id, target.combatant_id)
                elif choice == "2":
                    target = self._choose_target("heal", allies)
                    if target is not None:
                        return Decision.heal(actor.combatant_id, target.combatant_id, self._heal_amount)
                else:
                    self._output("Invalid choice. Please enter 1 or 2.")
        except EOFError:
            self._output("No input available; passing the turn.")
            return None

    def _choose_target(self, verb: str, candidates: Sequence[CombatantView]) -> CombatantView | None:
        self._output(f"\nAvailable targets to {verb}:")
        for idx, candidate in enumerate(candidates, start=1):
            self._output(f"{idx}. {candidate.name} ({candidate.archetype}) - HP: {candidate.hp}/{candidate.max_hp}")
        raw_value = self._input(f"Choose target (1-{len(candidates)}): ").strip()
        try:
            index = int(raw_value)
        except ValueError:
            self._output("Invalid input. Please enter a number.")
            return None
        if 1 <= index <= len(candidates):
            return candidates[index - 1]
        self._output("Invalid target. Please try again.")
        return None

    def _render_state(
        self,
        actor: CombatantView,
        allies: Sequence[CombatantView],
        enemies: Sequence[CombatantView],
        state: RoundState,
    ) -> None:
        self._output("\n" + "=" * 60)
        self._output(f"TURN {state.turn_number + 1} - ROUND {state.round_number}")
        self._output("=" * 60)
        self._output("\nYour Team:")
        for ally in allies:
            marker = " (YOU)" if ally.combatant_id == actor.combatant_id else ""
            self._output(f"  {_format_line(ally)}{marker}")
        self._output("\nEnemy Team:")
        for enemy in enemies:
            self._output(f"  {_format_line(enemy)}")


def _format_line(view: CombatantView) -> str:
    return f"{view.name} ({view.archetype}) - HP: {view.hp}/{view.max_hp}, Mana: {view.mp}/{view.max_mp}"
