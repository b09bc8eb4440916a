"""Tunable timing and capacity settings for the shop simulation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from cozyshop.domain.inventory import DEFAULT_DISPLAY_CAPACITY

_INTEGER_FIELDS = ("display_capacity", "max_customers", "starting_coins", "markup")


@dataclass(frozen=True, slots=True)
class SimulationSettings:
    day_length_seconds: float = 60.0
    display_capacity: int = DEFAULT_DISPLAY_CAPACITY
    max_customers: int = 5
    transit_delay_seconds: float = 2.0
    exit_delay_seconds: float = 1.0
    browse_delay_range: Tuple[float, float] = (2.0, 5.0)
    deliberate_delay_range: Tuple[float, float] = (1.0, 3.0)
    spawn_window: Tuple[float, float] = (0.1, 0.7)
    starting_coins: int = 100
    markup: int = 5

    def __post_init__(self) -> None:
        for name in _INTEGER_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be a whole number (got {value!r}).")
        if self.day_length_seconds <= 0:
            raise ValueError("day_length_seconds must be positive.")
        if self.display_capacity <= 0:
            raise ValueError("display_capacity must be positive.")
        if self.max_customers <= 0:
            raise ValueError("max_customers must be positive.")
        if self.transit_delay_seconds < 0 or self.exit_delay_seconds < 0:
            raise ValueError("Delays must be zero or higher.")
        for name in ("browse_delay_range", "deliberate_delay_range", "spawn_window"):
            low, high = getattr(self, name)
            if low < 0 or high < low:
                raise ValueError(f"{name} must be an ordered, non-negative range.")
        if self.spawn_window[1] > 1:
            raise ValueError("spawn_window is a fraction of the day and cannot exceed 1.")
        if self.starting_coins < 0 or self.markup < 0:
            raise ValueError("starting_coins and markup must be zero or higher.")
