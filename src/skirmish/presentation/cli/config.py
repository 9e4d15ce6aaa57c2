"""CLI configuration helpers for settings persistence."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_HEAL_AMOUNT = 30
_DEFAULT_MAX_ROUNDS = 50


@dataclass(frozen=True)
class GameSettings:
    """User-tunable battle settings."""

    default_heal_amount: int = _DEFAULT_HEAL_AMOUNT
    max_rounds: int | None = _DEFAULT_MAX_ROUNDS
    decision_timeout: float | None = None
    human_player: bool = True
    oracle_command: str | None = None


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Skirmish"
        return Path.home() / "Skirmish"
    return Path.home() / ".config" / "skirmish"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _normalize_heal_amount(value: object) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return _DEFAULT_HEAL_AMOUNT


def _normalize_max_rounds(value: object) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    return _DEFAULT_MAX_ROUNDS


def _normalize_timeout(value: object) -> float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return float(value)
    return None


def _normalize_command(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _normalize(raw: dict) -> GameSettings:
    return GameSettings(
        default_heal_amount=_normalize_heal_amount(raw.get("default_heal_amount", _DEFAULT_HEAL_AMOUNT)),
        max_rounds=_normalize_max_rounds(raw.get("max_rounds", _DEFAULT_MAX_ROUNDS)),
        decision_timeout=_normalize_timeout(raw.get("decision_timeout")),
        human_player=raw.get("human_player", True) is not False,
        oracle_command=_normalize_command(raw.get("oracle_command")),
    )


def load_config(path: Path | None = None) -> GameSettings:
    """Load settings from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return GameSettings()
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return GameSettings()
    if not isinstance(raw, dict):
        return GameSettings()
    return _normalize(raw)


def save_config(settings: GameSettings, path: Path | None = None) -> None:
    """Persist settings to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(_normalize(asdict(settings)))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
