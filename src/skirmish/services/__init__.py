"""Service layer exports."""

from .battle_events import ActionResult, BattleEvent, GameOverReport
from .controllers import BattleController
from .errors import FactoryError

__all__ = [
    "ActionResult",
    "BattleController",
    "BattleEvent",
    "FactoryError",
    "GameOverReport",
]
