"""Shared type aliases for the core and domain layers."""
from typing import Literal

TeamNumber = Literal[1, 2]
ActionKind = Literal["attack", "heal"]
BattlePhase = Literal["round_start", "team_one", "team_two", "round_end", "game_over"]
GameOverReason = Literal["team_defeated", "mutual_defeat", "round_limit"]

__all__ = ["ActionKind", "BattlePhase", "GameOverReason", "TeamNumber"]
