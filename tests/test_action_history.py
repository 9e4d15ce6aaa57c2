"""Action history executes, records, and undoes in strict LIFO order."""
from __future__ import annotations

import pytest

from skirmish.domain.actions import AttackAction, HealAction
from skirmish.domain.combatant import Combatant
from skirmish.domain.entities import Stats
from skirmish.domain.history import ActionHistory
from skirmish.domain.roster import Roster


def _build_history() -> tuple[ActionHistory, Roster]:
    roster = Roster(
        [
            Combatant(
                combatant_id="hero",
                name="Hero",
                archetype="Warrior",
                stats=Stats(max_hp=150, hp=150, max_mp=50, mp=50, attack=40, defense=30),
                attack_style="melee",
                defense_style="heavy_armor",
            ),
            Combatant(
                combatant_id="enemy",
                name="Enemy",
                archetype="Mage",
                stats=Stats(max_hp=80, hp=80, max_mp=150, mp=150, attack=60, defense=10),
                attack_style="magic",
                defense_style="standard",
            ),
            Combatant(
                combatant_id="healer",
                name="Healer",
                archetype="Mage",
                stats=Stats(max_hp=80, hp=80, max_mp=150, mp=150, attack=60, defense=10),
                attack_style="magic",
                defense_style="standard",
            ),
        ]
    )
    return ActionHistory(roster), roster


def test_execute_runs_action_and_records_it() -> None:
    history, roster = _build_history()

    history.execute(AttackAction(attacker_id="hero", target_id="enemy"))

    assert roster.get("enemy").stats.hp == 37
    assert len(history) == 1
    assert history.size == 1
    assert history.can_undo is True


def test_undo_last_restores_state_and_pops() -> None:
    history, roster = _build_history()
    action = history.execute(AttackAction(attacker_id="hero", target_id="enemy"))

    undone = history.undo_last()

    assert undone is action
    assert roster.get("enemy").stats.hp == 80
    assert len(history) == 0
    assert history.can_undo is False
    assert history.last is None


def test_undo_is_lifo_with_intermediate_states() -> None:
    history, roster = _build_history()
    target = roster.get("enemy")
    target.set_health(50)

    history.execute(HealAction(healer_id="healer", target_id="enemy", amount=20))
    assert target.stats.hp == 70
    history.execute(AttackAction(attacker_id="hero", target_id="enemy"))
    after_attack = target.stats.hp
    assert after_attack == 27
    history.execute(HealAction(healer_id="healer", target_id="enemy", amount=10))
    assert target.stats.hp == 37

    history.undo_last()
    assert target.stats.hp == after_attack
    history.undo_last()
    assert target.stats.hp == 70
    history.undo_last()
    assert target.stats.hp == 50


def test_two_undos_after_three_actions_leave_only_the_first() -> None:
    history, roster = _build_history()
    first = history.execute(AttackAction(attacker_id="hero", target_id="enemy"))
    history.execute(AttackAction(attacker_id="enemy", target_id="hero"))
    history.execute(HealAction(healer_id="hero", target_id="hero", amount=30))

    history.undo_last()
    history.undo_last()

    assert roster.get("enemy").stats.hp == 37
    assert roster.get("hero").stats.hp == 150
    assert history.actions == (first,)


def test_undo_on_empty_history_is_a_no_op() -> None:
    history, roster = _build_history()

    assert history.undo_last() is None
    assert history.undo_last() is None
    assert roster.get("hero").stats.hp == 150
    assert roster.get("enemy").stats.hp == 80
    assert len(history) == 0


def test_undoing_attack_keeps_earlier_heal() -> None:
    history, roster = _build_history()
    roster.get("enemy").set_health(60)

    history.execute(HealAction(healer_id="enemy", target_id="enemy", amount=20))
    history.execute(AttackAction(attacker_id="hero", target_id="enemy"))
    history.undo_last()

    assert roster.get("enemy").stats.hp == 80


def test_full_rewind_of_a_small_battle() -> None:
    history, roster = _build_history()

    history.execute(AttackAction(attacker_id="hero", target_id="enemy"))
    history.execute(AttackAction(attacker_id="enemy", target_id="hero"))
    history.execute(HealAction(healer_id="hero", target_id="hero", amount=30))
    assert roster.get("hero").stats.hp == 120
    assert roster.get("enemy").stats.hp == 37

    for _ in range(3):
        history.undo_last()

    assert roster.get("hero").stats.hp == 150
    assert roster.get("enemy").stats.hp == 80


def test_failed_execute_is_not_recorded() -> None:
    history, roster = _build_history()

    with pytest.raises(KeyError):
        history.execute(AttackAction(attacker_id="hero", target_id="ghost"))

    assert len(history) == 0
    assert roster.get("hero").stats.hp == 150
