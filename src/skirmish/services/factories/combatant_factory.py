"""Factory for creating combatants from archetype definitions."""
from __future__ import annotations

from skirmish.data.repositories import ArchetypesRepository
from skirmish.domain.combatant import Combatant
from skirmish.domain.entities import Stats
from skirmish.services.errors import FactoryError

from .id_factory import make_combatant_id


def create_combatant(
    archetype_id: str,
    name: str,
    archetypes_repo: ArchetypesRepository,
    *,
    combatant_id: str | None = None,
) -> Combatant:
    """Instantiate a full-health combatant of the requested archetype."""
    try:
        archetype = archetypes_repo.get(archetype_id)
    except KeyError as exc:
        raise FactoryError(f"Archetype '{archetype_id}' not found.") from exc

    stats = Stats.full(
        max_hp=archetype.base_hp,
        max_mp=archetype.base_mp,
        attack=archetype.attack,
        defense=archetype.defense,
    )
    return Combatant(
        combatant_id=combatant_id or make_combatant_id(name),
        name=name,
        archetype=archetype.name,
        stats=stats,
        attack_style=archetype.attack_style,
        defense_style=archetype.defense_style,
    )
