"""Customer archetype definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Budget:
    """Inclusive coin range a customer is willing to spend."""

    min: int
    max: int


@dataclass(frozen=True, slots=True)
class CustomerTypeDef:
    """Shop-floor customer archetype with fixed patience."""

    id: str
    avatar: str
    product_types: Tuple[str, ...]
    colors: Tuple[str, ...]
    budget: Budget
    patience_seconds: float
    weight: int = 1
