"""Palette color definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ColorDef:
    id: str
    name: str
    hex: str
