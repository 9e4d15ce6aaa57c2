"""Adapter that asks an external text oracle (e.g. a language model) for decisions.

The oracle is any callable taking a prompt and returning the raw reply text.
Replies must be a JSON object ``{"action": "attack"|"heal", "target": name,
"reasoning": text}``; anything else falls back to a deterministic strategy.
"""
from __future__ import annotations

import json
import logging
import re
import shlex
import subprocess
from typing import Callable, List, Optional, Sequence, Union

from skirmish.domain.decisions import Decision, DecisionStrategy
from skirmish.domain.roster import CombatantView
from skirmish.domain.round_state import RoundState
from skirmish.services.strategies.rule_based import RuleBasedStrategy

logger = logging.getLogger(__name__)

Oracle = Callable[[str], str]

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


class OracleStrategy:
    """Builds a tactical prompt, calls the oracle, and validates its reply."""

    def __init__(
        self,
        ask: Oracle,
        model_name: str,
        *,
        fallback: DecisionStrategy | None = None,
        heal_amount: int = 30,
    ) -> None:
        self._ask = ask
        self.model_name = model_name
        self._fallback = fallback or RuleBasedStrategy(heal_amount=heal_amount)
        self._heal_amount = heal_amount

    def decide(
        self,
        actor: CombatantView,
        allies: Sequence[CombatantView],
        enemies: Sequence[CombatantView],
        state: RoundState,
    ) -> Optional[Decision]:
        prompt = build_prompt(actor, allies, enemies, state, heal_amount=self._heal_amount)
        try:
            reply = self._ask(prompt)
        except Exception:
            logger.warning("[%s] oracle call failed; using fallback", self.model_name, exc_info=True)
            return self._fallback.decide(actor, allies, enemies, state)

        decision = self._parse(reply, actor, allies, enemies)
        if decision is None:
            logger.warning("[%s] invalid reply %r; using fallback", self.model_name, reply)
            return self._fallback.decide(actor, allies, enemies, state)
        return decision

    def _parse(
        self,
        reply: object,
        actor: CombatantView,
        allies: Sequence[CombatantView],
        enemies: Sequence[CombatantView],
    ) -> Decision | None:
        payload = parse_reply(reply)
        if payload is None:
            return None
        action = payload.get("action")
        target_name = payload.get("target")
        if not isinstance(action, str) or not isinstance(target_name, str):
            return None

        action = action.strip().lower()
        if action == "attack":
            target = _find_by_name(target_name, enemies)
            if target is None or not target.is_alive:
                return None
            return Decision.attack(actor.combatant_id, target.combatant_id)
        if action == "heal":
            target = _find_by_name(target_name, allies)
            if target is None:
                return None
            return Decision.heal(actor.combatant_id, target.combatant_id, self._heal_amount)
        return None


def command_oracle(command: Union[str, Sequence[str]], *, timeout: float | None = None) -> Oracle:
    """Oracle that pipes each prompt to an external command and returns its stdout.

    ``command`` is an argv list or a shell-style string, e.g. ``"ollama run llama3"``.
    A non-zero exit status raises ``subprocess.CalledProcessError``.
    """
    argv = shlex.split(command) if isinstance(command, str) else list(command)
    if not argv:
        raise ValueError("Oracle command cannot be empty.")

    def ask(prompt: str) -> str:
        completed = subprocess.run(
            argv, input=prompt, capture_output=True, text=True, check=True, timeout=timeout
        )
        return completed.stdout

    return ask


def parse_reply(reply: object) -> dict | None:
    """Extract the JSON object from a reply, tolerating fenced code blocks."""
    if not isinstance(reply, str) or not reply.strip():
        return None
    text = reply.strip()
    fenced = _FENCE.search(text)
    if fenced:
        text = fenced.group(1).strip()
    else:
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end < start:
            return None
        text = text[start : end + 1]
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return None
    return payload if isinstance(payload, dict) else None


def build_prompt(
    actor: CombatantView,
    allies: Sequence[CombatantView],
    enemies: Sequence[CombatantView],
    state: RoundState,
    *,
    heal_amount: int = 30,
) -> str:
    """Describe the battlefield and the expected reply format."""
    lines: List[str] = [
        f"You are {actor.name}, a {actor.archetype} in tactical turn-based RPG combat.",
        f"Round {state.round_number}, turn {state.turn_number + 1}.",
        "",
        "YOUR STATUS:",
        f"- HP: {actor.hp}/{actor.max_hp} ({actor.hp_ratio:.0%})",
        f"- Mana: {actor.mp}/{actor.max_mp}",
        f"- Attack Power: {actor.attack}, Defense: {actor.defense}",
        "",
        "YOUR TEAM (allies):",
        *_format_roster(allies),
        "",
        "ENEMIES:",
        *_format_roster(enemies),
        "",
        "AVAILABLE ACTIONS:",
    ]
    living_enemies = [enemy for enemy in enemies if enemy.is_alive]
    for enemy in living_enemies:
        lines.append(f'  - attack "{enemy.name}" - Estimated damage: ~{_estimate_damage(actor, enemy)}')
    if not living_enemies:
        lines.append("  - (no valid attack targets)")
    for ally in allies:
        lines.append(f'  - heal "{ally.name}" - Restores ~{heal_amount} HP')
    lines.extend(
        [
            "",
            "TACTICAL GUIDANCE:",
            "- Focus fire: Attack wounded enemies to eliminate threats quickly.",
            "- Protect allies: Prefer healing teammates below 30% HP.",
            f"- Consider your role: {role_advice(actor.archetype)}",
            "",
            "Respond ONLY with JSON in the following format (no extra text):",
            '{"action": "attack" | "heal", "target": "character_name", "reasoning": "brief tactical explanation"}',
        ]
    )
    return "\n".join(lines)


def role_advice(archetype: str) -> str:
    kind = archetype.lower()
    if "mage" in kind or "wizard" in kind:
        return "Use your high damage output to finish off low-HP enemies."
    if "healer" in kind or "cleric" in kind or "support" in kind:
        return "Prioritize healing critically wounded allies; only attack when your team is safe."
    if "tank" in kind or "warrior" in kind or "knight" in kind:
        return "Focus on dangerous enemies that threaten your fragile allies and keep your HP high."
    return "Balance attacking vulnerable enemies with healing low-HP allies."


def _format_roster(combatants: Sequence[CombatantView]) -> List[str]:
    if not combatants:
        return ["  - (none)"]
    return [
        f"  - {c.name} ({c.archetype}): {c.hp}/{c.max_hp} HP ({c.hp_ratio:.0%}), {c.attack} ATK, {c.defense} DEF"
        for c in combatants
    ]


def _estimate_damage(attacker: CombatantView, target: CombatantView) -> int:
    # Views carry no combat styles, so this is only a rough figure.
    return max(0, attacker.attack - target.defense // 2)


def _find_by_name(name: str, combatants: Sequence[CombatantView]) -> CombatantView | None:
    wanted = name.strip().lower()
    for combatant in combatants:
        if combatant.name.lower() == wanted:
            return combatant
    return None
