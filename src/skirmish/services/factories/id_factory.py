"""Utilities for creating stable combatant identifiers."""
from __future__ import annotations

import re
from typing import Container

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def make_combatant_id(name: str, taken: Container[str] = ()) -> str:
    """Slugify ``name`` and add a numeric suffix until it is not in ``taken``."""
    base = _NON_SLUG.sub("_", name.lower()).strip("_") or "combatant"
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}_{suffix}"
        suffix += 1
    return candidate
