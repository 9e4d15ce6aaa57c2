"""Immutable round/turn counters threaded through the battle controller."""
from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class RoundState:
    """Snapshot of the game clock; every transition returns a new value."""

    round_number: int = 1
    turn_number: int = 0
    command_history_size: int = 0
    can_undo: bool = False

    @classmethod
    def initial(cls) -> RoundState:
        return cls()

    def next_turn(self) -> RoundState:
        return replace(self, turn_number=self.turn_number + 1)

    def next_round(self) -> RoundState:
        return replace(self, round_number=self.round_number + 1)

    def with_history(self, size: int) -> RoundState:
        """Correlate the snapshot with the current action history length."""
        if size < 0:
            raise ValueError("History size cannot be negative.")
        return replace(self, command_history_size=size, can_undo=size > 0)
