"""Session-level state threaded through every shop service."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from cozyshop.core.rng import RNG
from cozyshop.domain.customer import Customer
from cozyshop.domain.inventory import DisplayStore, InventoryStore, Wallet

DEFAULT_POPULAR_PRODUCT_TYPES: Tuple[str, ...] = ("mug", "tote")
DEFAULT_POPULAR_COLORS: Tuple[str, ...] = ("#FF5252", "#4CAF50")


@dataclass(frozen=True, slots=True)
class Trend:
    """Popular product types and colors that bias new customers."""

    popular_product_types: Tuple[str, ...] = DEFAULT_POPULAR_PRODUCT_TYPES
    popular_colors: Tuple[str, ...] = DEFAULT_POPULAR_COLORS

    def drift(self, rng: RNG, template_ids: Sequence[str], palette: Sequence[str]) -> "Trend":
        """Rotate in one random type and color, keeping the previous leader of each."""
        new_type = rng.choice(list(template_ids))
        new_color = rng.choice(list(palette))
        return Trend(
            popular_product_types=_rotate(new_type, self.popular_product_types),
            popular_colors=_rotate(new_color, self.popular_colors),
        )


def _rotate(newcomer: str, previous: Tuple[str, ...]) -> Tuple[str, ...]:
    if not previous:
        return (newcomer,)
    return tuple(dict.fromkeys((newcomer, previous[0])))


@dataclass
class ShopDayState:
    """Bookkeeping for one running day. Replaced when the next day starts."""

    day_number: int
    day_length_seconds: float
    in_progress: bool = False
    active_customers: List[Customer] = field(default_factory=list)
    scheduled_spawn_count: int = 0
    started_at: float = 0.0


@dataclass
class ShopSession:
    """Everything the simulation mutates, passed explicitly instead of held globally."""

    seed: int
    rng: RNG
    inventory: InventoryStore = field(default_factory=InventoryStore)
    displays: DisplayStore = field(default_factory=DisplayStore)
    wallet: Wallet = field(default_factory=Wallet)
    day: int = 1
    trend: Trend = field(default_factory=Trend)
    customers_served: int = 0
    shop_open: bool = False
