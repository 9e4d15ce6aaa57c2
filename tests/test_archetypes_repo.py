from __future__ import annotations

import json
from pathlib import Path

import pytest

from skirmish.data import DataLoadError, DataValidationError
from skirmish.data.repositories import ArchetypesRepository


def _valid_payload() -> dict:
    return {
        "knight": {
            "name": "Knight",
            "base_hp": 120,
            "base_mp": 20,
            "attack": 30,
            "defense": 25,
            "attack_style": "melee",
            "defense_style": "heavy_armor",
        }
    }


def _write_definitions(tmp_path: Path, payload: object) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    (definitions_dir / "archetypes.json").write_text(json.dumps(payload), encoding="utf-8")
    return definitions_dir


def test_bundled_archetypes_load() -> None:
    repo = ArchetypesRepository()

    assert repo.ids() == ["archer", "mage", "rogue", "warrior"]
    warrior = repo.get("warrior")
    assert warrior.name == "Warrior"
    assert warrior.base_hp == 150
    assert warrior.attack == 40
    assert warrior.attack_style == "melee"
    mage = repo.get("mage")
    assert mage.base_hp == 80
    assert mage.defense == 10
    assert mage.defense_style == "standard"


def test_custom_definitions_directory(tmp_path: Path) -> None:
    repo = ArchetypesRepository(base_path=_write_definitions(tmp_path, _valid_payload()))

    knight = repo.get("knight")

    assert knight.id == "knight"
    assert knight.base_mp == 20
    assert [archetype.id for archetype in repo.all()] == ["knight"]


def test_unknown_archetype_raises_key_error(tmp_path: Path) -> None:
    repo = ArchetypesRepository(base_path=_write_definitions(tmp_path, _valid_payload()))

    with pytest.raises(KeyError):
        repo.get("dragon")


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    repo = ArchetypesRepository(base_path=tmp_path)

    with pytest.raises(DataLoadError):
        repo.all()


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "archetypes.json").write_text("{not json", encoding="utf-8")
    repo = ArchetypesRepository(base_path=tmp_path)

    with pytest.raises(DataLoadError):
        repo.all()


def test_top_level_must_be_object(tmp_path: Path) -> None:
    repo = ArchetypesRepository(base_path=_write_definitions(tmp_path, ["knight"]))

    with pytest.raises(DataValidationError):
        repo.all()


@pytest.mark.parametrize(
    "field, value",
    [
        ("attack_style", "telekinesis"),
        ("defense_style", "mirror"),
        ("base_hp", 0),
        ("attack", "strong"),
        ("defense", True),
        ("name", ""),
    ],
)
def test_invalid_field_values_are_rejected(tmp_path: Path, field: str, value: object) -> None:
    payload = _valid_payload()
    payload["knight"][field] = value
    repo = ArchetypesRepository(base_path=_write_definitions(tmp_path, payload))

    with pytest.raises(DataValidationError):
        repo.get("knight")


def test_schema_drift_is_rejected(tmp_path: Path) -> None:
    payload = _valid_payload()
    payload["knight"]["speed"] = 3
    del payload["knight"]["base_mp"]
    repo = ArchetypesRepository(base_path=_write_definitions(tmp_path, payload))

    with pytest.raises(DataValidationError, match="missing fields"):
        repo.all()
