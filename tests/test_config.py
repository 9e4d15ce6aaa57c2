from __future__ import annotations

import json
from pathlib import Path

from skirmish.presentation.cli.config import GameSettings, load_config, save_config


def test_missing_config_returns_defaults(tmp_path: Path) -> None:
    settings = load_config(tmp_path / "missing.json")

    assert settings == GameSettings()
    assert settings.default_heal_amount == 30
    assert settings.max_rounds == 50
    assert settings.decision_timeout is None
    assert settings.human_player is True


def test_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    settings = GameSettings(default_heal_amount=20, max_rounds=None, decision_timeout=2.5, human_player=False)

    save_config(settings, path)

    assert load_config(path) == settings
    assert json.loads(path.read_text(encoding="utf-8"))["max_rounds"] is None


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {"default_heal_amount": -3, "max_rounds": 0, "decision_timeout": "soon", "human_player": "nope"}
        ),
        encoding="utf-8",
    )

    settings = load_config(path)

    assert settings.default_heal_amount == 30
    assert settings.max_rounds == 50
    assert settings.decision_timeout is None
    assert settings.human_player is True


def test_unreadable_or_non_object_config_returns_defaults(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{oops", encoding="utf-8")
    listing = tmp_path / "list.json"
    listing.write_text("[]", encoding="utf-8")

    assert load_config(broken) == GameSettings()
    assert load_config(listing) == GameSettings()


def test_oracle_command_is_trimmed_and_blank_means_none(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"oracle_command": "  ollama run llama3 "}), encoding="utf-8")
    assert load_config(path).oracle_command == "ollama run llama3"

    path.write_text(json.dumps({"oracle_command": "   "}), encoding="utf-8")
    assert load_config(path).oracle_command is None
