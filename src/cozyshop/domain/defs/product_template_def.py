"""Product template definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ArtAnchorDef:
    """Where player artwork is placed on the product image, in template pixels."""

    x: int
    y: int
    width: int
    height: int
    rotation: float = 0.0


@dataclass(frozen=True, slots=True)
class ProductTemplateDef:
    """Immutable blank product the player can print artwork on."""

    id: str
    name: str
    base_price: int
    art_anchor: ArtAnchorDef
    image: str = ""
