"""Undo stack for executed actions."""
from __future__ import annotations

import logging
from typing import List, Tuple

from skirmish.domain.actions import Action
from skirmish.domain.roster import Roster

logger = logging.getLogger(__name__)


class ActionHistory:
    """Executes actions and keeps them in order for strict LIFO undo.

    Undoing pops the action for good; there is no redo. ``len(history)``
    therefore counts actions that are executed and not undone.
    """

    def __init__(self, roster: Roster) -> None:
        self._roster = roster
        self._actions: List[Action] = []

    def execute(self, action: Action) -> Action:
        """Run ``action`` and record it. Nothing is recorded if it raises."""
        action.execute(self._roster)
        self._actions.append(action)
        logger.debug("Executed %s (history size %d)", action.describe(self._roster), len(self._actions))
        return action

    def undo_last(self) -> Action | None:
        """Undo and drop the most recent action; ``None`` when history is empty."""
        if not self._actions:
            return None
        action = self._actions[-1]
        action.undo(self._roster)
        self._actions.pop()
        logger.debug("Undid %s (history size %d)", action.describe(self._roster), len(self._actions))
        return action

    @property
    def size(self) -> int:
        return len(self._actions)

    @property
    def can_undo(self) -> bool:
        return bool(self._actions)

    @property
    def last(self) -> Action | None:
        return self._actions[-1] if self._actions else None

    @property
    def actions(self) -> Tuple[Action, ...]:
        return tuple(self._actions)

    def __len__(self) -> int:
        return len(self._actions)
