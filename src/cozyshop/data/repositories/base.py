"""Base repository implementation for JSON definition data."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, List, TypeVar

from cozyshop.data import paths
from cozyshop.data.errors import DataValidationError
from cozyshop.data.json_loader import load_definition_file

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Lazy loading, caching and field validation shared by every definition file."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    def _get_file_path(self) -> Path:
        return paths.get_definition_file(self._filename, self._base_path)

    def _load_raw(self) -> dict[str, object]:
        return load_definition_file(self._get_file_path())

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert a raw dict into typed definitions."""
        raise NotImplementedError

    def _ensure_loaded(self) -> Dict[str, T]:
        if self._definitions is None:
            self._definitions = self._build(self._load_raw())
        return self._definitions

    def get(self, def_id: str) -> T:
        """Return a definition by id, raising KeyError when it is unknown."""
        definitions = self._ensure_loaded()
        try:
            return definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def find(self, def_id: str) -> T | None:
        """Return a definition by id, or None when it is unknown."""
        return self._ensure_loaded().get(def_id)

    def all(self) -> List[T]:
        """Return all definitions sorted deterministically by id."""
        definitions = self._ensure_loaded()
        return [definitions[key] for key in sorted(definitions.keys())]

    def ids(self) -> List[str]:
        return sorted(self._ensure_loaded().keys())

    def _section(self, raw: dict[str, object], key: str) -> dict[str, object]:
        return self._require_mapping(raw.get(key), f"{self._filename}.{key}")

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str) or not value:
            raise DataValidationError(f"{context} must be a non-empty string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_number(value: object, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataValidationError(f"{context} must be a number.")
        return float(value)

    @staticmethod
    def _require_str_list(value: object, context: str) -> List[str]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list.")
        result: List[str] = []
        for entry in value:
            if not isinstance(entry, str):
                raise DataValidationError(f"{context} entries must be strings.")
            result.append(entry)
        return result

    def _require_matching_id(self, key: object, payload: dict[str, object], kind: str) -> str:
        if not isinstance(key, str):
            raise DataValidationError(f"{kind} IDs must be strings.")
        value = self._require_str(payload.get("id", key), f"{kind} '{key}' id")
        if value != key:
            raise DataValidationError(f"{kind} '{key}' id must match key (found '{value}').")
        return key
