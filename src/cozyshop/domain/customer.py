"""Customer runtime models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from cozyshop.core.types import CustomerStateName
from cozyshop.domain.defs import Budget


@dataclass(frozen=True, slots=True)
class CustomerPreferences:
    """What a customer is looking for and how long they will wait."""

    liked_product_types: FrozenSet[str]
    liked_colors: FrozenSet[str]
    budget: Budget
    patience_seconds: float

    def likes_type(self, template_id: str) -> bool:
        return template_id in self.liked_product_types


@dataclass(slots=True)
class Customer:
    id: str
    avatar: str
    preferences: CustomerPreferences
    entered_at: float
    customer_type: str = "wanderer"
    state: CustomerStateName = "entering"
    interested_product_id: str | None = None
    made_purchase: bool = False
    history: list[CustomerStateName] = field(default_factory=list)
