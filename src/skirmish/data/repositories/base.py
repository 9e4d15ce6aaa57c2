"""Cached, lazily-loaded repository over one JSON definition file."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, TypeVar

from skirmish.data import paths
from skirmish.data.errors import DataValidationError
from skirmish.data.json_loader import read_json_object

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Loads a definitions file on first access and serves typed entries by id."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    @property
    def file_path(self) -> Path:
        return paths.get_definitions_path(self._base_path) / self._filename

    def _build(self, raw: Dict[str, object]) -> Dict[str, T]:
        """Convert the raw file contents into typed definitions."""
        raise NotImplementedError

    def _definitions_by_id(self) -> Dict[str, T]:
        if self._definitions is None:
            self._definitions = self._build(read_json_object(self.file_path))
        return self._definitions

    def get(self, def_id: str) -> T:
        """Return a definition by id, raising KeyError when it is missing."""
        definitions = self._definitions_by_id()
        if def_id not in definitions:
            raise KeyError(def_id)
        return definitions[def_id]

    def all(self) -> list[T]:
        """Return all definitions ordered by id."""
        definitions = self._definitions_by_id()
        return [definitions[key] for key in sorted(definitions)]

    def ids(self) -> list[str]:
        return sorted(self._definitions_by_id())

    @staticmethod
    def _require_mapping(value: object, context: str) -> Dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str) or not value:
            raise DataValidationError(f"{context} must be a non-empty string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str, *, minimum: int = 0) -> int:
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        if value < minimum:
            raise DataValidationError(f"{context} must be at least {minimum}.")
        return value

    @staticmethod
    def _assert_exact_fields(payload: Dict[str, object], expected_keys: set[str], context: str) -> None:
        actual_keys = set(payload)
        missing = expected_keys - actual_keys
        unknown = actual_keys - expected_keys
        if missing or unknown:
            msg_parts = []
            if missing:
                msg_parts.append(f"missing fields: {sorted(missing)}")
            if unknown:
                msg_parts.append(f"unknown fields: {sorted(unknown)}")
            raise DataValidationError(f"{context} has schema issues ({'; '.join(msg_parts)}).")
