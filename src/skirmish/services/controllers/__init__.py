"""UI-agnostic controllers for battle orchestration."""
from __future__ import annotations

from .battle_controller import DEFAULT_HEAL_AMOUNT, BattleController

__all__ = [
    "BattleController",
    "DEFAULT_HEAL_AMOUNT",
]
