"""Deadline wrapper for slow or blocking decision strategies."""
from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence, Tuple

from skirmish.domain.decisions import Decision, DecisionStrategy
from skirmish.domain.roster import CombatantView
from skirmish.domain.round_state import RoundState

logger = logging.getLogger(__name__)


class _PendingCall:
    """One ``decide`` call running on its own daemon thread."""

    def __init__(self, inner: DecisionStrategy, args: tuple) -> None:
        self.result: Optional[Decision] = None
        self.error: Optional[Exception] = None
        self._thread = threading.Thread(target=self._run, args=(inner, args), daemon=True, name="decision")
        self._thread.start()

    def _run(self, inner: DecisionStrategy, args: tuple) -> None:
        try:
            self.result = inner.decide(*args)
        except Exception as exc:
            self.error = exc

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def wait(self, timeout: float) -> bool:
        self._thread.join(timeout)
        return not self.running


class DeadlineStrategy:
    """Runs ``inner.decide`` on a worker thread and gives up after ``timeout_seconds``.

    A timed-out call returns no decision and is left running. If the same
    combatant is asked again while it is still running, that call is awaited
    instead of starting a second one, so a late console answer is used on
    the combatant's next turn rather than swallowed. Calls for other
    combatants always get a fresh thread.
    """

    def __init__(self, inner: DecisionStrategy, timeout_seconds: float) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive.")
        self._inner = inner
        self._timeout = timeout_seconds
        self._pending: Optional[Tuple[str, _PendingCall]] = None

    def decide(
        self,
        actor: CombatantView,
        allies: Sequence[CombatantView],
        enemies: Sequence[CombatantView],
        state: RoundState,
    ) -> Optional[Decision]:
        call = self._take_pending(actor.combatant_id)
        if call is None:
            call = _PendingCall(self._inner, (actor, allies, enemies, state))

        if not call.wait(self._timeout):
            logger.warning("Decision for %s timed out after %.1fs", actor.name, self._timeout)
            self._pending = (actor.combatant_id, call)
            return None
        if call.error is not None:
            raise call.error
        return call.result

    def _take_pending(self, combatant_id: str) -> Optional[_PendingCall]:
        if self._pending is None:
            return None
        pending_id, call = self._pending
        self._pending = None
        if pending_id == combatant_id and call.running:
            logger.debug("Waiting on the earlier decision for %s", combatant_id)
            return call
        return None
