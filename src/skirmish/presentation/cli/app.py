"""Console-driven battle for skirmish."""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from skirmish.data.repositories import ArchetypesRepository
from skirmish.domain.decisions import DecisionStrategy
from skirmish.domain.roster import Roster
from skirmish.presentation.cli.config import GameSettings, load_config
from skirmish.presentation.cli.render import debug_enabled, render_event, render_report
from skirmish.services import BattleController, GameOverReport
from skirmish.services.factories import create_combatant, make_combatant_id
from skirmish.services.strategies import (
    ConsoleStrategy,
    DeadlineStrategy,
    Oracle,
    OracleStrategy,
    RuleBasedStrategy,
    command_oracle,
)

# (name, archetype id) in turn order.
TEAM_ONE_LINEUP: Tuple[Tuple[str, str], ...] = (("Conan", "warrior"), ("Gandalf", "mage"))
TEAM_TWO_LINEUP: Tuple[Tuple[str, str], ...] = (
    ("Legolas", "archer"),
    ("Assassin", "rogue"),
    ("Tank", "warrior"),
)

# Seconds an oracle-controlled combatant may think when no decision_timeout is set.
DEFAULT_ORACLE_TIMEOUT = 30.0


def main(argv: Sequence[str] | None = None) -> None:
    """Start the interactive CLI battle."""
    args = _parse_args(argv)
    _configure_logging(args.verbose)
    settings = load_config(args.config)
    if args.auto:
        settings = replace(settings, human_player=False)
    if args.max_rounds is not None:
        settings = replace(settings, max_rounds=args.max_rounds)
    if args.oracle_command:
        settings = replace(settings, oracle_command=args.oracle_command)

    print("=== Skirmish: turn-based team combat ===")
    controller = build_controller(settings, ArchetypesRepository())
    run_battle(controller)


def build_controller(
    settings: GameSettings, archetypes_repo: ArchetypesRepository, *, ask: Oracle | None = None
) -> BattleController:
    """Create the default line-up and assign a strategy to every combatant.

    Team two is oracle-controlled when ``ask`` is given or ``oracle_command``
    is configured; each oracle call is bounded by a deadline.
    """
    roster = Roster()
    team_one = _build_team(roster, TEAM_ONE_LINEUP, archetypes_repo)
    team_two = _build_team(roster, TEAM_TWO_LINEUP, archetypes_repo)

    rules = RuleBasedStrategy(heal_amount=settings.default_heal_amount)
    strategies: Dict[str, DecisionStrategy] = {combatant_id: rules for combatant_id in team_one + team_two}
    if settings.human_player:
        human: DecisionStrategy = ConsoleStrategy(heal_amount=settings.default_heal_amount)
        if settings.decision_timeout is not None:
            human = DeadlineStrategy(human, settings.decision_timeout)
        strategies[team_one[0]] = human

    if ask is None and settings.oracle_command:
        ask = command_oracle(settings.oracle_command)
    if ask is not None:
        model_name = settings.oracle_command or "oracle"
        timeout = settings.decision_timeout or DEFAULT_ORACLE_TIMEOUT
        for combatant_id in team_two:
            oracle = OracleStrategy(ask, model_name, fallback=rules, heal_amount=settings.default_heal_amount)
            strategies[combatant_id] = DeadlineStrategy(oracle, timeout)

    return BattleController(
        roster,
        team_one,
        team_two,
        strategies,
        default_heal_amount=settings.default_heal_amount,
        max_rounds=settings.max_rounds,
    )


def run_battle(controller: BattleController) -> GameOverReport:
    """Play a prepared battle to completion, printing every event."""
    report = controller.play_game(on_event=render_event)
    render_report(report)
    return report


def _build_team(
    roster: Roster, lineup: Sequence[Tuple[str, str]], archetypes_repo: ArchetypesRepository
) -> List[str]:
    members: List[str] = []
    for name, archetype_id in lineup:
        combatant_id = make_combatant_id(name, roster)
        roster.add(create_combatant(archetype_id, name, archetypes_repo, combatant_id=combatant_id))
        members.append(combatant_id)
    return members


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="skirmish", description="Turn-based team combat.")
    parser.add_argument("--auto", action="store_true", help="Let rule-based AI control every combatant")
    parser.add_argument("--config", type=Path, default=None, help="Path to a settings JSON file")
    parser.add_argument("--max-rounds", type=int, default=None, help="End in a draw after this many rounds")
    parser.add_argument(
        "--oracle-command", default=None, help="Command that answers team two's prompts on stdin/stdout"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
