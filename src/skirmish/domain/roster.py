"""Id-indexed ownership of every combatant in a battle."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from skirmish.domain.combatant import Combatant


@dataclass(frozen=True, slots=True)
class CombatantView:
    """Read-only snapshot of a combatant handed to decision strategies."""

    combatant_id: str
    name: str
    archetype: str
    hp: int
    max_hp: int
    mp: int
    max_mp: int
    attack: int
    defense: int

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def hp_ratio(self) -> float:
        if self.max_hp <= 0:
            return 0.0
        return self.hp / self.max_hp


class Roster:
    """Owns combatants by stable id so teams and actions only hold ids."""

    def __init__(self, combatants: Iterable[Combatant] = ()) -> None:
        self._combatants: Dict[str, Combatant] = {}
        for combatant in combatants:
            self.add(combatant)

    def add(self, combatant: Combatant) -> None:
        if combatant.combatant_id in self._combatants:
            raise ValueError(f"Duplicate combatant id '{combatant.combatant_id}'.")
        self._combatants[combatant.combatant_id] = combatant

    def get(self, combatant_id: str) -> Combatant:
        try:
            return self._combatants[combatant_id]
        except KeyError as exc:
            raise KeyError(combatant_id) from exc

    def __contains__(self, combatant_id: object) -> bool:
        return combatant_id in self._combatants

    def __iter__(self) -> Iterator[Combatant]:
        return iter(self._combatants.values())

    def __len__(self) -> int:
        return len(self._combatants)

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._combatants)

    def view(self, combatant_id: str) -> CombatantView:
        combatant = self.get(combatant_id)
        stats = combatant.stats
        return CombatantView(
            combatant_id=combatant.combatant_id,
            name=combatant.name,
            archetype=combatant.archetype,
            hp=stats.hp,
            max_hp=stats.max_hp,
            mp=stats.mp,
            max_mp=stats.max_mp,
            attack=stats.attack,
            defense=stats.defense,
        )

    def views(self, combatant_ids: Sequence[str]) -> List[CombatantView]:
        return [self.view(combatant_id) for combatant_id in combatant_ids]

    def any_alive(self, combatant_ids: Sequence[str]) -> bool:
        return any(self.get(combatant_id).is_alive for combatant_id in combatant_ids)
