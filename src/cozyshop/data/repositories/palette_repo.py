"""Painting palette repository."""
from __future__ import annotations

import re
from typing import Dict, List

from cozyshop.data import paths
from cozyshop.data.errors import DataValidationError
from cozyshop.data.repositories.base import RepositoryBase
from cozyshop.domain.defs import ColorDef

_HEX_PATTERN = re.compile(r"^#[0-9A-F]{6}$")


class PaletteRepository(RepositoryBase[ColorDef]):
    """Loads the canvas palette; customers express color taste in these hex values."""

    def __init__(self, base_path=None) -> None:
        super().__init__(paths.PALETTE_FILE, base_path)

    def hex_values(self) -> List[str]:
        return [color.hex for color in self.all()]

    def _build(self, raw: dict[str, object]) -> Dict[str, ColorDef]:
        colors = self._section(raw, "colors")
        definitions: Dict[str, ColorDef] = {}
        seen: set[str] = set()
        for key, payload in colors.items():
            data = self._require_mapping(payload, f"color '{key}'")
            color_id = self._require_matching_id(key, data, "color")
            hex_value = self._require_str(data.get("hex"), f"color '{key}' hex").upper()
            if not _HEX_PATTERN.match(hex_value):
                raise DataValidationError(f"color '{key}' hex '{hex_value}' is not #RRGGBB.")
            if hex_value in seen:
                raise DataValidationError(f"color '{key}' duplicates hex '{hex_value}'.")
            seen.add(hex_value)
            definitions[color_id] = ColorDef(
                id=color_id,
                name=self._require_str(data.get("name"), f"color '{key}' name"),
                hex=hex_value,
            )
        if not definitions:
            raise DataValidationError("palette.json must define at least one color.")
        return definitions
