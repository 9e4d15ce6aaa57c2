from __future__ import annotations

import threading
from typing import List

import pytest

from skirmish.domain.decisions import Decision
from skirmish.domain.roster import CombatantView
from skirmish.domain.round_state import RoundState
from skirmish.services.strategies import DeadlineStrategy


def _view(combatant_id: str) -> CombatantView:
    return CombatantView(
        combatant_id=combatant_id,
        name=combatant_id.title(),
        archetype="Mage",
        hp=80,
        max_hp=80,
        mp=150,
        max_mp=150,
        attack=60,
        defense=10,
    )


class _Blocking:
    """Every call waits for ``release`` before attacking."""

    def __init__(self) -> None:
        self.release = threading.Event()
        self.calls: List[str] = []

    def decide(self, actor, allies, enemies, state):
        self.calls.append(actor.combatant_id)
        self.release.wait(timeout=5)
        return Decision.attack(actor.combatant_id, enemies[0].combatant_id)


class _SlowFirstCall:
    """Blocks on the first call only; later calls answer at once."""

    def __init__(self) -> None:
        self.release = threading.Event()
        self.calls = 0

    def decide(self, actor, allies, enemies, state):
        self.calls += 1
        if self.calls == 1:
            self.release.wait(timeout=5)
        return Decision.attack(actor.combatant_id, enemies[0].combatant_id)


class _Instant:
    def decide(self, actor, allies, enemies, state):
        return Decision.attack(actor.combatant_id, enemies[0].combatant_id)


class _Broken:
    def decide(self, actor, allies, enemies, state):
        raise RuntimeError("boom")


def test_fast_decision_passes_through() -> None:
    strategy = DeadlineStrategy(_Instant(), timeout_seconds=1.0)

    decision = strategy.decide(_view("hero"), [], [_view("foe")], RoundState.initial())

    assert decision == Decision.attack("hero", "foe")


def test_timeout_yields_no_decision() -> None:
    inner = _Blocking()
    strategy = DeadlineStrategy(inner, timeout_seconds=0.05)
    try:
        decision = strategy.decide(_view("hero"), [], [_view("foe")], RoundState.initial())
    finally:
        inner.release.set()

    assert decision is None


def test_timeout_does_not_block_other_combatants() -> None:
    inner = _SlowFirstCall()
    strategy = DeadlineStrategy(inner, timeout_seconds=0.05)
    try:
        first = strategy.decide(_view("hero"), [], [_view("foe")], RoundState.initial())
        second = strategy.decide(_view("sidekick"), [], [_view("foe")], RoundState.initial())
    finally:
        inner.release.set()

    assert first is None
    assert second == Decision.attack("sidekick", "foe")


def test_same_combatant_reuses_the_call_still_running() -> None:
    inner = _Blocking()
    strategy = DeadlineStrategy(inner, timeout_seconds=0.05)
    try:
        assert strategy.decide(_view("hero"), [], [_view("foe")], RoundState.initial()) is None
        assert strategy.decide(_view("hero"), [], [_view("foe")], RoundState.initial()) is None
        assert inner.calls == ["hero"]

        inner.release.set()
        late = strategy.decide(_view("hero"), [], [_view("foe")], RoundState.initial())
    finally:
        inner.release.set()

    assert late == Decision.attack("hero", "foe")


def test_inner_errors_propagate_to_the_caller() -> None:
    strategy = DeadlineStrategy(_Broken(), timeout_seconds=1.0)

    with pytest.raises(RuntimeError):
        strategy.decide(_view("hero"), [], [_view("foe")], RoundState.initial())


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValueError):
        DeadlineStrategy(_Instant(), timeout_seconds=0)
