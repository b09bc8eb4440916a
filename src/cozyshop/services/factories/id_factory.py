"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from typing import Container

from cozyshop.core.rng import RNG


def make_instance_id(prefix: str, rng: RNG, taken: Container[str] = ()) -> str:
    """Generate a deterministic identifier that is not already in taken."""
    while True:
        candidate = f"{prefix}_{rng.randint(100000, 999999)}"
        if candidate not in taken:
            return candidate
