"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import List

from skirmish.services.battle_events import (
    ActionResolvedEvent,
    ActionUndoneEvent,
    BattleEvent,
    BattleResolvedEvent,
    CombatantDefeatedEvent,
    GameOverReport,
    RoundStartedEvent,
    TurnSkippedEvent,
    TurnStartedEvent,
)

_RULE = "=" * 60


def debug_enabled() -> bool:
    """Return True only when SKIRMISH_DEBUG is explicitly set to '1'."""
    return os.getenv("SKIRMISH_DEBUG") == "1"


def format_event(event: BattleEvent) -> List[str]:
    """Return the console lines for a single battle event."""
    if isinstance(event, RoundStartedEvent):
        return ["", _RULE, f"ROUND {event.round_number}", _RULE]
    if isinstance(event, TurnStartedEvent):
        return ["", f"{event.combatant_name}'s turn"]
    if isinstance(event, ActionResolvedEvent):
        result = event.result
        if result.kind == "attack":
            verb = f"attacks {result.target_name} for {result.amount} damage!"
        else:
            verb = f"heals {result.target_name} for {result.amount} HP!"
        return [f"→ {result.actor_name} {verb}", f"  {result.target_name}: {result.target_hp_after} HP"]
    if isinstance(event, CombatantDefeatedEvent):
        return [f"  {event.combatant_name} has been defeated!"]
    if isinstance(event, TurnSkippedEvent):
        if event.reason == "defeated":
            return [f"  {event.combatant_name} is down and cannot act."] if debug_enabled() else []
        return [f"→ {event.combatant_name} does nothing ({event.reason})."]
    if isinstance(event, ActionUndoneEvent):
        return [f"↺ Undid: {event.description} ({event.history_size} actions left)"]
    if isinstance(event, BattleResolvedEvent):
        return []
    return [f"- {event}"]


def render_event(event: BattleEvent) -> None:
    for line in format_event(event):
        print(line)


def format_report(report: GameOverReport) -> List[str]:
    """Return the console lines for the final game-over report."""
    lines = ["", _RULE, "GAME OVER", _RULE]
    if report.winning_team is None:
        if report.reason == "round_limit":
            lines.append(f"Draw: round limit reached after {report.rounds_played} rounds.")
        else:
            lines.append("Draw: both teams fell together.")
    else:
        lines.append(f"🏆 Team {report.winning_team} wins!")

    lines.append("\nFinal Status:")
    for team in (1, 2):
        lines.append(f"\nTeam {team}:")
        for summary in report.combatants:
            if summary.team != team:
                continue
            status = "Alive" if summary.alive else "Defeated"
            lines.append(f"  {summary.name} ({summary.archetype}): {summary.final_hp} HP - {status}")

    lines.append(f"\nTotal turns played: {report.total_turns}")
    lines.append(f"Total commands executed: {report.total_commands_executed}")
    return lines


def render_report(report: GameOverReport) -> None:
    for line in format_report(report):
        print(line)
