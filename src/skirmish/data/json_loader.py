"""JSON file helpers shared by the definition repositories."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from .errors import DataLoadError, DataValidationError


def read_json_object(path: Path) -> Dict[str, object]:
    """Parse ``path`` and return its top-level JSON object.

    Unreadable or malformed files raise DataLoadError; any top-level value
    other than an object raises DataValidationError.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DataLoadError(f"Definition file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read definition file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path} (line {exc.lineno}): {exc.msg}") from exc

    if not isinstance(payload, dict):
        raise DataValidationError(f"Expected a top-level object in {path}, got {type(payload).__name__}.")
    return payload
