"""Archetypes repository with style validation."""
from __future__ import annotations

from typing import Dict

from skirmish.data.errors import DataValidationError
from skirmish.data.repositories.base import RepositoryBase
from skirmish.domain.combatant import ATTACK_MULTIPLIERS, DEFENSE_STYLES
from skirmish.domain.defs import ArchetypeDef

_FIELDS = {"name", "base_hp", "base_mp", "attack", "defense", "attack_style", "defense_style"}


class ArchetypesRepository(RepositoryBase[ArchetypeDef]):
    """Loads combatant archetypes from ``archetypes.json``."""

    def __init__(self, base_path=None) -> None:
        super().__init__("archetypes.json", base_path)

    def _build(self, raw: Dict[str, object]) -> Dict[str, ArchetypeDef]:
        archetypes: Dict[str, ArchetypeDef] = {}
        for raw_id, payload in raw.items():
            context = f"archetype '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(data, _FIELDS, context)

            attack_style = self._require_str(data["attack_style"], f"{context} attack_style")
            if attack_style not in ATTACK_MULTIPLIERS:
                raise DataValidationError(f"{context} has unknown attack_style '{attack_style}'.")
            defense_style = self._require_str(data["defense_style"], f"{context} defense_style")
            if defense_style not in DEFENSE_STYLES:
                raise DataValidationError(f"{context} has unknown defense_style '{defense_style}'.")

            archetypes[raw_id] = ArchetypeDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                base_hp=self._require_int(data["base_hp"], f"{context} base_hp", minimum=1),
                base_mp=self._require_int(data["base_mp"], f"{context} base_mp"),
                attack=self._require_int(data["attack"], f"{context} attack"),
                defense=self._require_int(data["defense"], f"{context} defense"),
                attack_style=attack_style,
                defense_style=defense_style,
            )
        return archetypes
