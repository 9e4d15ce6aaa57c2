"""Helpers for resolving data file locations."""
from __future__ import annotations

import os
from pathlib import Path


def get_repo_root() -> Path:
    """Return the repository root."""
    return Path(__file__).resolve().parents[3]


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing JSON definition files.

    ``SKIRMISH_DEFINITIONS`` overrides the bundled ``data/definitions`` folder.
    """
    if base_path is not None:
        return Path(base_path)
    override = os.getenv("SKIRMISH_DEFINITIONS")
    if override:
        return Path(override)
    return get_repo_root() / "data" / "definitions"
